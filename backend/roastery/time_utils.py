from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Optional

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
_DISPLAY_DATE_RE = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.utcnow()


def today() -> date:
    return utcnow().date()


def parse_display_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a DD/MM/YYYY string into a date.

    - None / "" -> None
    - surrounding whitespace is not trimmed; " 01/01/2024" is malformed
    - anything else that is not exactly two digits / two digits / four digits -> ValueError
    - well-formed but impossible dates (31/02/2024) -> ValueError
    """
    if value is None or value == "":
        return None

    if not _DISPLAY_DATE_RE.fullmatch(value):
        raise ValueError(f"invalid date: {value!r}")

    return datetime.strptime(value, DISPLAY_DATE_FORMAT).date()


def to_display_date(value: Optional[date | datetime]) -> Optional[str]:
    """Serializes a date or datetime as DD/MM/YYYY."""
    if value is None:
        return None
    return value.strftime(DISPLAY_DATE_FORMAT)


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """
    Half-open datetime window covering the calendar days start..end inclusive.

    Returns (start 00:00, day after end 00:00) so callers can filter with
    start <= ts < upper.
    """
    lower = datetime.combine(start, datetime.min.time())
    upper = datetime.combine(end + timedelta(days=1), datetime.min.time())
    return lower, upper
