"""Time helpers shared by the audit writer and query engine.

A tz of None means the operating system's local zone. It is resolved per value
through datetime.astimezone(), so each datetime gets the offset in force on its
own date rather than the offset in force today.
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """IANA zone by name; None (or blank) means the operating system's local zone."""
    if name and name.strip():
        return ZoneInfo(name.strip())
    return None


def ensure_aware(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Interpret naive datetimes in tz; aware datetimes are returned unchanged."""
    if value.tzinfo is not None:
        return value
    if tz is None:
        return value.astimezone()
    return value.replace(tzinfo=tz)


def start_of_day(now: datetime, tz: Optional[tzinfo]) -> datetime:
    """Local midnight of the calendar day containing now, as an aware datetime."""
    local = ensure_aware(now, timezone.utc).astimezone(tz)
    midnight = datetime(local.year, local.month, local.day)
    return ensure_aware(midnight, tz)
