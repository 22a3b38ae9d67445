"""
Small shared helpers for time handling.
"""

from datetime import date, datetime, time, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to aware UTC.

    Naive values (SQLite drops tzinfo on round-trip) are taken to be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day_utc(value: date) -> datetime:
    """Midnight UTC at the beginning of ``value``."""
    return datetime.combine(value, time.min, tzinfo=timezone.utc)
