from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_PORT = 3000
DEFAULT_FROM_EMAIL = "Hello Movers <onboarding@resend.dev>"
DEFAULT_BRAND = "Hello Movers"
DEFAULT_TIMEZONE = "America/New_York"


def _port(value: str | None) -> int:
    if not value:
        return DEFAULT_PORT
    try:
        port = int(value.strip())
    except ValueError:
        return DEFAULT_PORT
    return port if 0 < port < 65536 else DEFAULT_PORT


def _timezone(value: str | None) -> str:
    name = (value or "").strip()
    if not name:
        return DEFAULT_TIMEZONE
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return DEFAULT_TIMEZONE
    return name


@dataclass(frozen=True)
class Settings:
    resend_api_key: str = ""
    to_email: str = ""
    from_email: str = DEFAULT_FROM_EMAIL
    brand_name: str = DEFAULT_BRAND
    display_timezone: str = DEFAULT_TIMEZONE
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        # Unknown zone names fall back to the default.
        object.__setattr__(self, "display_timezone", _timezone(self.display_timezone))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            resend_api_key=env.get("RESEND_API_KEY", "").strip(),
            to_email=env.get("NOTIFY_TO_EMAIL", "").strip(),
            from_email=env.get("NOTIFY_FROM_EMAIL", "").strip() or DEFAULT_FROM_EMAIL,
            brand_name=env.get("BRAND_NAME", "").strip() or DEFAULT_BRAND,
            display_timezone=_timezone(env.get("DISPLAY_TIMEZONE")),
            port=_port(env.get("PORT")),
        )
