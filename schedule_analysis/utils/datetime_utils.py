"""Date and time utilities."""

import calendar
import math
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Tuple, Union

DateLike = Union[date, datetime]

SECONDS_PER_DAY = 24 * 3600


def to_datetime(value: Optional[DateLike]) -> Optional[datetime]:
    """Normalize a date or datetime to a naive datetime.

    Dates map to midnight; aware datetimes are converted to naive UTC so
    every value compares with every other.
    """
    if value is None:
        return None
    if not isinstance(value, datetime):
        return datetime.combine(value, datetime.min.time())
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_datetime(value) -> Optional[datetime]:
    """Parse an ISO-8601 string, date or datetime; empty values give None."""
    if value is None or value == '':
        return None
    if isinstance(value, (date, datetime)):
        return to_datetime(value)
    text = str(value).strip()
    # fromisoformat() before 3.11 rejects the trailing Z
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return to_datetime(datetime.fromisoformat(text))


def days_between(later: DateLike, earlier: DateLike) -> int:
    """Whole days from ``earlier`` to ``later``, partial days rounded up."""
    delta = to_datetime(later) - to_datetime(earlier)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def date_range(start: DateLike, end: DateLike) -> List[date]:
    """Inclusive list of calendar days between two dates."""
    days = []
    current = as_date(start)
    last = as_date(end)

    while current <= last:
        days.append(current)
        current += timedelta(days=1)

    return days


def inclusive_day_span(start: DateLike, end: DateLike) -> int:
    """Inclusive calendar day count of an interval, never less than 1."""
    return max(1, (as_date(end) - as_date(start)).days + 1)


def week_bounds(day: DateLike) -> Tuple[date, date]:
    """Sunday-to-Saturday week containing ``day``."""
    current = as_date(day)
    start = current - timedelta(days=(current.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def month_bounds(day: DateLike) -> Tuple[date, date]:
    """First and last day of the calendar month containing ``day``."""
    current = as_date(day)
    last_day = calendar.monthrange(current.year, current.month)[1]
    return current.replace(day=1), current.replace(day=last_day)


def get_working_days(start_date: DateLike, end_date: DateLike, working_days: List[int]) -> List[date]:
    """Get list of working days between start and end dates."""
    return [day for day in date_range(start_date, end_date) if is_working_day(day, working_days)]


def is_working_day(day: DateLike, working_days: List[int]) -> bool:
    """Check if a date is a working day."""
    return day.weekday() in working_days


def as_date(value: DateLike) -> date:
    """Date part of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value
