# payloads/event.py
# =============================================================================
# 📅 Event QR-Code (iCalendar VEVENT)
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from payloads.base import Payload, compact
from payloads.checks import optional_text, require_datetime, require_text
from payloads.errors import OutOfRange
from payloads.normalizers import utc_stamp


@dataclass(frozen=True)
class EventFields:
    title: str
    start: datetime
    end: datetime
    location: Optional[str] = None
    description: Optional[str] = None


def ical_stamp(moment: datetime) -> str:
    """2025-03-01T18:00:00Z → 20250301T180000Z"""
    return utc_stamp(moment).replace("-", "").replace(":", "")


def escape_ical(value: str) -> str:
    value = value.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,")
    return value.replace("\r\n", "\\n").replace("\n", "\\n")


def validate(raw: Mapping[str, Any]) -> EventFields:
    title = require_text(raw, "title", max_len=200, reason="Event title is required")
    start = require_datetime(raw, "start")
    end = require_datetime(raw, "end")
    if end < start:
        raise OutOfRange("end", "Event end must not be before its start")
    location = optional_text(raw, "location", max_len=500)
    description = optional_text(raw, "description", max_len=2000)
    return EventFields(title, start, end, location, description)


def build(fields: EventFields) -> Payload:
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "BEGIN:VEVENT",
        f"SUMMARY:{escape_ical(fields.title)}",
        f"DTSTART:{ical_stamp(fields.start)}",
        f"DTEND:{ical_stamp(fields.end)}",
    ]
    if fields.location:
        lines.append(f"LOCATION:{escape_ical(fields.location)}")
    if fields.description:
        lines.append(f"DESCRIPTION:{escape_ical(fields.description)}")
    lines += ["END:VEVENT", "END:VCALENDAR"]

    metadata = compact({
        "title": fields.title,
        "start": utc_stamp(fields.start),
        "end": utc_stamp(fields.end),
        "location": fields.location,
    })
    return Payload("event", "\n".join(lines), metadata, label=fields.title)
