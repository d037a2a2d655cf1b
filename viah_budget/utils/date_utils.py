"""Date manipulation utilities"""

import math
from datetime import date, datetime, time, timezone
from typing import Any, Optional


def parse_date(value: Any) -> Optional[date]:
    """Parse a date, datetime or ISO string; None when it cannot be parsed"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def month_key(day: date) -> str:
    """Calendar month bucket key, e.g. 2026-03"""
    return f"{day.year:04d}-{day.month:02d}"


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end (negative when end is earlier)"""
    return (end.year - start.year) * 12 + (end.month - start.month)


def days_until(due: date, now: datetime) -> int:
    """Days from now until midnight of the due date, rounded up"""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    due_at = datetime.combine(due, time.min, tzinfo=now.tzinfo)
    return math.ceil((due_at - now).total_seconds() / 86400)
