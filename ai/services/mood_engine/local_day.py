from __future__ import annotations
from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Tuple, Union

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .observability import get_logger, log_event

logger = get_logger("local_day")

DayKey = Tuple[int, int, int]

WEEKDAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONTH_NAMES = ["January", "February", "March", "April", "May", "June",
               "July", "August", "September", "October", "November", "December"]


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """IANA name -> tzinfo. Empty means the system local zone (None)."""
    name = (name or "").strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        log_event(logger, "timezone_unknown", level="warning", tz=name)
        return None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_local(instant: datetime, tz: Optional[tzinfo] = None) -> datetime:
    # naive timestamps are stored UTC
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(tz) if tz is not None else instant.astimezone()


def local_day_key(instant: Union[datetime, date], tz: Optional[tzinfo] = None) -> DayKey:
    """The (year, month, day) an instant falls on in the observer's timezone.

    A plain date is already a local day and is returned as-is.
    """
    if isinstance(instant, datetime):
        local = to_local(instant, tz)
        return (local.year, local.month, local.day)
    return (instant.year, instant.month, instant.day)


def local_date(instant: datetime, tz: Optional[tzinfo] = None) -> date:
    return date(*local_day_key(instant, tz))


def local_today(tz: Optional[tzinfo] = None, now: Optional[datetime] = None) -> date:
    return local_date(now or utcnow(), tz)


def weekday_index(d: date) -> int:
    """Sunday = 0 .. Saturday = 6."""
    return (d.weekday() + 1) % 7


def format_long_date(d: date) -> str:
    # Monday, October 19, 2026
    return f"{WEEKDAY_NAMES[weekday_index(d)]}, {MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"


def format_short_date(d: date) -> str:
    # Oct 19
    return f"{MONTH_NAMES[d.month - 1][:3]} {d.day}"


def format_entry_date(instant: datetime, tz: Optional[tzinfo] = None) -> str:
    local = to_local(instant, tz)
    hour = local.hour % 12 or 12
    ampm = "AM" if local.hour < 12 else "PM"
    return f"{format_long_date(local.date())} at {hour:02d}:{local.minute:02d} {ampm}"


def as_utc(instant: datetime) -> datetime:
    # naive timestamps are stored UTC
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)
