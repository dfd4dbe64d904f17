from __future__ import annotations

import pytest

from src.config import DEFAULT_FROM_EMAIL, DEFAULT_TIMEZONE, Settings


def test_settings_defaults_when_env_is_empty():
    settings = Settings.from_env({})
    assert settings.resend_api_key == ""
    assert settings.to_email == ""
    assert settings.from_email == DEFAULT_FROM_EMAIL
    assert settings.display_timezone == "America/New_York"
    assert settings.port == 3000


def test_settings_read_from_environment():
    settings = Settings.from_env(
        {
            "RESEND_API_KEY": " re_live ",
            "NOTIFY_TO_EMAIL": "owner@example.com",
            "NOTIFY_FROM_EMAIL": "Leads <leads@example.com>",
            "BRAND_NAME": "Acme Moving",
            "PORT": "8080",
        }
    )
    assert settings.resend_api_key == "re_live"
    assert settings.to_email == "owner@example.com"
    assert settings.from_email == "Leads <leads@example.com>"
    assert settings.brand_name == "Acme Moving"
    assert settings.port == 8080


@pytest.mark.parametrize("raw", ["", "abc", "0", "70000"])
def test_invalid_port_falls_back_to_default(raw):
    assert Settings.from_env({"PORT": raw}).port == 3000


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.port = 1  # type: ignore[misc]


@pytest.mark.parametrize("raw", ["Eastern", "Not/AZone", "../etc/passwd", "  "])
def test_invalid_timezone_falls_back_to_default(raw):
    assert Settings.from_env({"DISPLAY_TIMEZONE": raw}).display_timezone == DEFAULT_TIMEZONE
    assert Settings(display_timezone=raw).display_timezone == DEFAULT_TIMEZONE


def test_valid_timezone_is_kept():
    settings = Settings.from_env({"DISPLAY_TIMEZONE": "America/Chicago"})
    assert settings.display_timezone == "America/Chicago"
