from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import resend
from resend.exceptions import ResendError

logger = logging.getLogger(__name__)


class DeliveryError(RuntimeError):
    """Raised by callers when the mail provider did not accept a notification."""


@dataclass(frozen=True)
class DeliveryResult:
    ok: bool
    message_id: str | None = None
    error: str | None = None


class Mailer(Protocol):
    def send(self, sender: str, recipient: str, subject: str, html: str) -> DeliveryResult: ...


class ResendMailer:
    """Deliver notifications through the Resend HTTP API. One attempt per call.

    The SDK reads its key from module state, so a process holds a single Resend key.
    """

    def __init__(self, api_key: str):
        self.api_key = api_key
        if api_key:
            resend.api_key = api_key

    def send(self, sender: str, recipient: str, subject: str, html: str) -> DeliveryResult:
        if not self.api_key:
            return DeliveryResult(ok=False, error="RESEND_API_KEY is not configured")
        if not recipient:
            return DeliveryResult(ok=False, error="NOTIFY_TO_EMAIL is not configured")
        params: resend.Emails.SendParams = {
            "from": sender,
            "to": [recipient],
            "subject": subject,
            "html": html,
        }
        try:
            response = resend.Emails.send(params)
        except ResendError as exc:
            logger.warning("Resend rejected notification to %s: %s", recipient, exc)
            return DeliveryResult(ok=False, error=str(exc))
        message_id = response.get("id") if isinstance(response, dict) else None
        return DeliveryResult(ok=True, message_id=message_id)
