from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from src.api.webhook import router as webhook_router
from src.config import Settings
from src.env_loader import load_env_file
from src.leads.fields import default_registry
from src.leads.mailer import Mailer, ResendMailer

HEALTH_MESSAGE = "{brand} Email Webhook is running! (v3)"


def create_app(settings: Settings | None = None, mailer: Mailer | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    # Registry errors surface at startup.
    default_registry()

    application = FastAPI(title=f"{settings.brand_name} Lead Webhook")
    application.state.settings = settings
    application.state.mailer = mailer or ResendMailer(settings.resend_api_key)
    application.include_router(webhook_router)

    @application.get("/", response_class=PlainTextResponse, tags=["meta"])
    async def index() -> str:
        return HEALTH_MESSAGE.format(brand=settings.brand_name)

    @application.get("/health", tags=["meta"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return application


load_env_file()

app = create_app()


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    settings: Settings = app.state.settings
    logging.getLogger(__name__).info("Server running on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
