"""
utils/dates.py -- Lenient calendar-date parsing shared by filters, sorting and grouping.

parse_date(value)   -> naive UTC datetime, or None when unparseable
to_timestamp(value) -> float POSIX timestamp, or None

Accepted inputs: date / datetime objects and ISO-8601 strings
("2024-01-15", "2024-01-15 10:30:00", "2024-01-15T10:30:00Z", ...).
Naive values are taken as UTC, so a bare calendar date is UTC midnight.
Aware values are converted to UTC before the tzinfo is dropped.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def parse_date(value: object) -> Optional[datetime]:
    """Parse a date-like value; never raises."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def to_timestamp(value: object) -> Optional[float]:
    """Convert a date-like value to a comparable POSIX timestamp."""
    dt = parse_date(value)
    if dt is None:
        return None
    return dt.replace(tzinfo=timezone.utc).timestamp()
