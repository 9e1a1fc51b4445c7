"""
Time source for sale timestamps and reporting windows.
"""

from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Protocol, Tuple
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime:
        """Current instant as a timezone-aware UTC datetime."""
        ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def resolve_timezone(name: str) -> tzinfo:
    """Map a configured timezone name to a tzinfo; 'UTC' never needs the tz database."""
    if name.upper() in ("UTC", "Z", "ETC/UTC"):
        return timezone.utc
    return ZoneInfo(name)


def as_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC.

    Stores without timezone support (SQLite) hand back naive values that were
    written as UTC, so naive input is taken to be UTC already.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_window(now: datetime, tz: tzinfo) -> Tuple[datetime, datetime]:
    """
    Return [start, end) of the calendar day containing `now` in `tz`, in UTC.

    The start is local midnight; the end is the next local midnight, so days
    with a DST shift are 23 or 25 hours long.
    """
    local_now = as_utc(now).astimezone(tz)
    local_date = local_now.date()
    start = datetime.combine(local_date, time.min, tzinfo=tz)
    end = datetime.combine(local_date + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)
