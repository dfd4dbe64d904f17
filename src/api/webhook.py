from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..config import Settings
from ..leads.compose import compose_notification
from ..leads.extract import build_lead_record, extract_collected_data
from ..leads.mailer import DeliveryError, Mailer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])


async def _deliver(request: Request, payload: Any) -> None:
    settings: Settings = request.app.state.settings
    mailer: Mailer = request.app.state.mailer

    collected = extract_collected_data(payload)
    logger.info("Extracted data collection:\n%s", json.dumps(collected, indent=2, default=str))
    lead = build_lead_record(collected)

    notification = compose_notification(
        lead,
        brand=settings.brand_name,
        timezone=settings.display_timezone,
    )
    result = await run_in_threadpool(
        mailer.send,
        settings.from_email,
        settings.to_email,
        notification.subject,
        notification.html,
    )
    if not result.ok:
        raise DeliveryError(result.error or "Email delivery failed")
    logger.info(
        "Email sent (id=%s) | Name: %s | Phone: %s | Email: %s",
        result.message_id,
        lead.caller_name,
        lead.phone_number,
        lead.email_address,
    )


@router.post("/webhook")
async def receive_webhook(request: Request) -> JSONResponse:
    try:
        logger.info("Webhook received")
        payload = await request.json()
        await _deliver(request, payload)
    except Exception as exc:
        logger.exception("Error processing webhook")
        return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})
    return JSONResponse(status_code=200, content={"success": True, "message": "Email sent"})
