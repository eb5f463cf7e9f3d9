"""Calendar-date helpers used by the recurrence engine.

Dates are plain timezone-less calendar days. Weekdays are numbered
Sunday-first (0 = Sunday ... 6 = Saturday), matching how chores store
their weekly schedule.
"""

import calendar
import re
from collections.abc import Iterator
from datetime import date, timedelta


WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def add_days(day: date, days: int) -> date:
    """Return the date `days` days after `day` (negative values go back)."""
    return day + timedelta(days=days)


def day_of_week(day: date) -> int:
    """Return the weekday number with 0 = Sunday."""
    return (day.weekday() + 1) % 7


def days_between(start: date, end: date) -> int:
    """Return the whole-day difference `end - start`."""
    return (end - start).days


def each_day(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in the inclusive range. Empty when start > end."""
    for offset in range(days_between(start, end) + 1):
        yield start + timedelta(days=offset)


def format_iso(day: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return day.isoformat()


def parse_iso(value: str) -> date:
    """Parse a strict YYYY-MM-DD string.

    Raises:
        ValueError: If the string is not a valid calendar date in that format
    """
    if not _ISO_DATE_RE.match(value):
        msg = f"Invalid date format: {value!r}. Expected YYYY-MM-DD"
        raise ValueError(msg)
    return date.fromisoformat(value)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a month."""
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def start_of_week(day: date) -> date:
    """Return the Sunday on or before `day`, or date.min if that Sunday does not exist."""
    return add_days(day, -min(day_of_week(day), days_between(date.min, day)))


def end_of_week(day: date) -> date:
    """Return the Saturday on or after `day`, or date.max if that Saturday does not exist."""
    return add_days(day, min(6 - day_of_week(day), days_between(day, date.max)))


def calendar_window(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day shown in a Sunday-first month grid.

    The grid is padded with days from the adjacent months so that it always
    covers whole weeks, except at the ends of the supported date range where it
    stops at date.min or date.max.
    """
    first, last = month_bounds(year, month)
    return start_of_week(first), end_of_week(last)
