from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

# Window bounds are the department's local calendar days.
DEFAULT_TIMEZONE = "Asia/Kolkata"


def reporting_zone(name: str = DEFAULT_TIMEZONE) -> tzinfo:
    return ZoneInfo(name)


def to_local_naive(value: Optional[datetime], tz: tzinfo) -> Optional[datetime]:
    """Express an aware datetime as naive wall-clock time in `tz`; naive values pass through."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def start_of_day(value: date) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.max)


def is_within_window(
    value: Optional[datetime],
    start: Optional[date],
    end: Optional[date],
) -> bool:
    """True iff `value` falls inside [start-of-day(start), end-of-day(end)]."""
    if value is None or start is None or end is None:
        return False
    return start_of_day(start) <= value <= end_of_day(end)


def was_active_before(
    first_activity: Optional[datetime],
    completion: Optional[datetime],
    window_start: Optional[date],
) -> bool:
    """True iff the application existed before the window opened and was still open then."""
    if first_activity is None or window_start is None:
        return False
    opened_at = start_of_day(window_start)
    if not first_activity < opened_at:
        return False
    return completion is None or completion > opened_at
