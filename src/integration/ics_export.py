from __future__ import annotations

import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from lifecapture.models import EventData

PRODID = "-//LifeCapture//Event Calendar//EN"
DEFAULT_DURATION = timedelta(hours=1)


def _escape(s: str) -> str:
    return (
        s.replace("\\", "\\\\")
        .replace(",", "\\,")
        .replace(";", "\\;")
        .replace("\n", "\\n")
    )


def _local(day: str, clock: str) -> datetime:
    try:
        return datetime.strptime(f"{day} {clock}", "%Y-%m-%d %H:%M")
    except ValueError as e:
        raise ValueError(f"event date/time must be YYYY-MM-DD and HH:MM, got {day!r} {clock!r}") from e


def generate_ics(
    event: EventData,
    now: Optional[datetime] = None,
    uid: Optional[str] = None,
) -> str:
    """
    Build a single-event VCALENDAR. Times are floating (no timezone), i.e. the
    wall-clock time printed on the flyer.
    """
    start = _local(event.date, event.time)
    if event.end_time:
        end = _local(event.end_date or event.date, event.end_time)
    else:
        end = start + DEFAULT_DURATION

    stamp = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    fmt = "%Y%m%dT%H%M%S"

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VEVENT",
        f"UID:{uid or uuid.uuid4()}@lifecapture.app",
        f"DTSTAMP:{stamp.strftime(fmt)}Z",
        f"DTSTART:{start.strftime(fmt)}",
        f"DTEND:{end.strftime(fmt)}",
        f"SUMMARY:{_escape(event.title)}",
    ]
    if event.host:
        lines.append(f"X-HOST:{_escape(event.host)}")
    if event.location:
        lines.append(f"LOCATION:{_escape(event.location)}")
    if event.description:
        lines.append(f"DESCRIPTION:{_escape(event.description)}")
    lines += [
        "STATUS:CONFIRMED",
        "SEQUENCE:0",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines)


def ics_filename(title: str) -> str:
    return f"{re.sub(r'[^a-z0-9]', '_', title, flags=re.IGNORECASE).lower()}.ics"
