from __future__ import annotations

import html
from dataclasses import dataclass
from datetime import datetime
from string import Template
from zoneinfo import ZoneInfo

from .extract import LeadRecord
from .fields import LeadField, LeadRegistry, default_registry

TIMEZONE_LABELS: dict[str, str] = {
    "America/New_York": "Eastern Time",
    "America/Chicago": "Central Time",
    "America/Denver": "Mountain Time",
    "America/Los_Angeles": "Pacific Time",
}

_PAGE = Template(
    """<!DOCTYPE html>
<html>
<head>
  <style>
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background-color: #2563eb; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0; }
    .content { background-color: #f9fafb; padding: 20px; border: 1px solid #e5e7eb; }
    .section { margin-bottom: 20px; }
    .section-title { font-weight: bold; color: #2563eb; margin-bottom: 10px; font-size: 16px; }
    .info-row { padding: 8px 0; border-bottom: 1px solid #e5e7eb; }
    .label { font-weight: 600; color: #6b7280; }
    .value { color: #111827; }
    .footer { background-color: #f3f4f6; padding: 15px; text-align: center; font-size: 12px; color: #6b7280; border-radius: 0 0 8px 8px; }
    .highlight { background-color: #dbeafe; padding: 15px; border-radius: 8px; margin-top: 15px; }
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1 style="margin: 0;">New Lead - $brand</h1>
      <p style="margin: 10px 0 0 0; opacity: 0.9;">A new caller just contacted your business</p>
    </div>
    <div class="content">
      <div class="section">
        <div class="section-title">Contact Information</div>
$contact_rows
      </div>
      <div class="section">
        <div class="section-title">Move Details</div>
$move_rows
      </div>
      <div class="highlight">
        <strong>Call Received:</strong> $call_time ($timezone_label)
      </div>
    </div>
    <div class="footer">
      This is an automated notification from your $brand AI Receptionist
    </div>
  </div>
</body>
</html>"""
)

_ROW = Template(
    """        <div class="info-row">
          <span class="label">$label:</span>
          <span class="value">$value</span>
        </div>"""
)


@dataclass(frozen=True)
class Notification:
    subject: str
    html: str
    call_time: str


def format_call_time(now: datetime | None = None, timezone: str = "America/New_York") -> str:
    """Render ``now`` the way US locales print a date-time, e.g. ``10/19/2026, 3:04:05 PM``."""

    zone = ZoneInfo(timezone)
    moment = now.astimezone(zone) if now is not None else datetime.now(zone)
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def timezone_label(timezone: str) -> str:
    return TIMEZONE_LABELS.get(timezone, timezone)


def build_subject(lead: LeadRecord) -> str:
    return f"New Lead: {lead.caller_name} - {lead.reason_for_calling}"


def _rows(lead: LeadRecord, fields: tuple[LeadField, ...]) -> str:
    return "\n".join(
        _ROW.substitute(
            label=html.escape(lead_field.label),
            value=html.escape(str(getattr(lead, lead_field.key, lead_field.placeholder))),
        )
        for lead_field in fields
    )


def compose_notification(
    lead: LeadRecord,
    *,
    brand: str = "Hello Movers",
    timezone: str = "America/New_York",
    now: datetime | None = None,
    registry: LeadRegistry | None = None,
) -> Notification:
    registry = registry or default_registry()
    call_time = format_call_time(now, timezone)
    body = _PAGE.substitute(
        brand=html.escape(brand),
        contact_rows=_rows(lead, registry.section("contact")),
        move_rows=_rows(lead, registry.section("move")),
        call_time=call_time,
        timezone_label=html.escape(timezone_label(timezone)),
    )
    return Notification(subject=build_subject(lead), html=body, call_time=call_time)
