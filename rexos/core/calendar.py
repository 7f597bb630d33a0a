"""
Calendar Helpers
Date keys and weekday names shared by the store, ratings and reports.

All per-day collections are keyed by "YYYY-MM-DD" strings taken from the
local wall-clock date. There is no timezone normalization: the same instant
can map to different keys in different timezones.
"""

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Union

from rexos.core.constants import WEEKDAYS


DateLike = Union[str, date, datetime]


def format_date(value: Union[date, datetime]) -> str:
    """Return the "YYYY-MM-DD" key of a date (or of a datetime's local date)."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_date(key: str) -> date:
    """Parse a "YYYY-MM-DD" key into a calendar date."""
    return date.fromisoformat(key)


def today() -> str:
    """Date key of the current local day."""
    return format_date(date.today())


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def get_day_name(value: DateLike) -> str:
    """
    English weekday name of a date key or date.

    The name is looked up by index so it does not depend on the process locale.

    Example:
        get_day_name("2024-01-15")  # "Monday"
    """
    return WEEKDAYS[_as_date(value).weekday()]


def get_week_dates(value: DateLike) -> List[str]:
    """
    Return the seven date keys of the week containing `value`, Monday first.

    Example:
        get_week_dates("2024-01-17")
        # ["2024-01-15", ..., "2024-01-21"]
    """
    day = _as_date(value)
    monday = day - timedelta(days=day.weekday())
    return [format_date(monday + timedelta(days=offset)) for offset in range(7)]


def get_date_range(days: int, end: Optional[DateLike] = None) -> List[str]:
    """Return `days` consecutive date keys ending at `end` (today by default), oldest first."""
    last = _as_date(end) if end is not None else date.today()
    return [format_date(last - timedelta(days=offset)) for offset in range(days - 1, -1, -1)]


def format_time(value: datetime) -> str:
    """12-hour clock time, e.g. "07:45 PM"."""
    return value.strftime("%I:%M %p")


def now_iso() -> str:
    """Current instant as an ISO-8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
