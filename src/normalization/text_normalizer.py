from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from dateutil import parser as dateutil_parser

from lifecapture.models import EventData

# Years further ahead than this are treated as misreads and replaced.
MAX_YEARS_AHEAD = 10
MAX_HOST_LENGTH = 120

MONTH_NAMES = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]
SHORT_MONTH_NAMES = [m[:3] for m in MONTH_NAMES]

_YEAR_PREFIX = re.compile(r"^(\d{4})")
_MMDD_AFTER_YEAR = re.compile(r"^(\d{1,2})[-/](\d{1,2})")
_MMDD = re.compile(r"^(\d{1,2})[-/](\d{1,2})(?:\s|$)")
_MONTH_DAY = [
    re.compile(rf"({full}|{short})\s+(\d{{1,2}})", re.IGNORECASE)
    for full, short in zip(MONTH_NAMES, SHORT_MONTH_NAMES)
]

_TIME_12H = re.compile(r"^(\d{1,2})(?:[:.](\d{2}))?\s*([ap])\.?\s*m\.?$", re.IGNORECASE)
_TIME_24H = re.compile(r"^(\d{1,2})[:.](\d{2})(?::\d{2})?$")


def _ymd(year: int, month: int | str, day: int | str) -> str:
    return f"{year}-{int(month):02d}-{int(day):02d}"


def _year_out_of_range(year: int, today: date) -> bool:
    return year < today.year or year > today.year + MAX_YEARS_AHEAD


def normalize_date(value: Optional[str], today: date) -> Optional[str]:
    """Normalize an extracted date to YYYY-MM-DD, assuming ``today.year`` when it is missing.

    Vision models often drop the year on flyers, so:

    - ``YYYY...`` with a past or far-future year gets the current year, keeping MM-DD;
      a reasonable year leaves the string untouched.
    - ``MM-DD`` / ``MM/DD`` gets the current year prefixed.
    - ``Jan 15`` / ``January 15`` becomes ``YYYY-01-15``.
    - anything else goes through dateutil; unparseable input, or input missing a month
      or day (a weekday, a clock time, a bare month), comes back trimmed.

    Never raises, and normalizing an already-normalized date is a no-op.
    """
    if value is None or not value.strip():
        return value

    trimmed = value.strip()
    current_year = today.year

    year_match = _YEAR_PREFIX.match(trimmed)
    if year_match:
        year = int(year_match.group(1))
        if not _year_out_of_range(year, today):
            return trimmed
        without_year = re.sub(r"^\d{4}[-/]?", "", trimmed)
        mmdd = _MMDD_AFTER_YEAR.match(without_year)
        if mmdd:
            return _ymd(current_year, mmdd.group(1), mmdd.group(2))

    mmdd = _MMDD.match(trimmed)
    if mmdd:
        return _ymd(current_year, mmdd.group(1), mmdd.group(2))

    for index, pattern in enumerate(_MONTH_DAY):
        match = pattern.search(trimmed)
        if match:
            return _ymd(current_year, index + 1, match.group(2))

    # Parse against two defaults: a month or day the text never supplied
    # comes from the default, so the results disagree ("Friday", "8pm", "Mar").
    try:
        parsed = dateutil_parser.parse(trimmed, default=datetime(current_year, 1, 1))
        check = dateutil_parser.parse(trimmed, default=datetime(current_year, 2, 2))
    except (ValueError, OverflowError):
        return trimmed
    if (parsed.month, parsed.day) != (check.month, check.day):
        return trimmed

    if _year_out_of_range(parsed.year, today):
        return _ymd(current_year, parsed.month, parsed.day)
    return _ymd(parsed.year, parsed.month, parsed.day)


def normalize_time(value: Optional[str]) -> Optional[str]:
    """Best-effort conversion to 24-hour HH:MM; unrecognized input is returned trimmed."""
    if value is None or not value.strip():
        return value

    trimmed = value.strip()

    m = _TIME_12H.match(trimmed)
    if m:
        hour = int(m.group(1))
        minute = int(m.group(2) or 0)
        if 1 <= hour <= 12 and minute < 60:
            hour = hour % 12
            if m.group(3).lower() == "p":
                hour += 12
            return f"{hour:02d}:{minute:02d}"
        return trimmed

    m = _TIME_24H.match(trimmed)
    if m:
        hour, minute = int(m.group(1)), int(m.group(2))
        if hour < 24 and minute < 60:
            return f"{hour:02d}:{minute:02d}"

    return trimmed


def normalize_event_dates(record: EventData, today: date) -> EventData:
    """Return a copy with normalized dates/times; ``end_date`` defaults to ``date``."""
    start = normalize_date(record.date, today) or record.date
    if record.end_date:
        end = normalize_date(record.end_date, today) or record.end_date
    else:
        end = start

    return record.model_copy(
        update={
            "date": start,
            "end_date": end,
            "time": normalize_time(record.time) or record.time,
            "end_time": normalize_time(record.end_time),
        }
    )


def sanitize_host(value: Optional[str]) -> str:
    s = re.sub(r"^[-:\s]+", "", value or "")
    s = re.sub(r"\s{2,}", " ", s)
    return s.strip()[:MAX_HOST_LENGTH]
