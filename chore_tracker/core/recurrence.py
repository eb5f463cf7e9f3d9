"""Recurrence expansion for chore scheduling.

Expands chore definitions into dated occurrences inside a query window and
finds the next occurrence after a reference date. Every function here is
pure: inputs are read-only, nothing is cached, and malformed recurrence
settings produce no occurrences instead of raising.
"""

from collections.abc import Iterable
from datetime import date

from chore_tracker.core.config import Constants
from chore_tracker.core.dates import WEEKDAY_LABELS, add_days, day_of_week, days_between, each_day, format_iso
from chore_tracker.domain.chore import Chore, ChoreInstance, Recurrence, RecurrenceType


DAYS_PER_WEEK = 7


def expand_occurrences(chores: Iterable[Chore], window_start: date, window_end: date) -> list[ChoreInstance]:
    """Expand chores into instances for every occurrence in [window_start, window_end].

    Instances of one chore come out in ascending date order; chores are
    processed in input order.

    Args:
        chores: Chore definitions to expand
        window_start: First day of the query window (inclusive)
        window_end: Last day of the query window (inclusive)

    Returns:
        One ChoreInstance per (chore, occurrence date) pair
    """
    instances: list[ChoreInstance] = []
    for chore in chores:
        for day in occurrence_dates(chore, window_start, window_end):
            key = format_iso(day)
            instances.append(ChoreInstance(chore=chore, date=key, is_completed=chore.is_completed_on(key)))
    return instances


def occurrence_dates(chore: Chore, window_start: date, window_end: date) -> list[date]:
    """Return the occurrence dates of a single chore within the inclusive window."""
    recurrence = chore.recurrence

    if recurrence.type == RecurrenceType.NONE:
        if window_start <= chore.due_date <= window_end:
            return [chore.due_date]
        return []

    start = max(window_start, chore.due_date)
    end = window_end
    if recurrence.end_date is not None and recurrence.end_date < end:
        end = recurrence.end_date
    if start > end:
        return []

    if recurrence.type == RecurrenceType.DAILY:
        return _daily_dates(chore.due_date, recurrence.interval, start, end)
    if recurrence.type == RecurrenceType.WEEKLY:
        return _weekly_dates(chore.due_date, recurrence.interval, recurrence.days_of_week, start, end)
    return []


def _daily_dates(anchor: date, interval: int, start: date, end: date) -> list[date]:
    if interval < 1:
        return []
    # Offsets are counted from start so no step ever lands past end
    remainder = days_between(anchor, start) % interval
    first_offset = (interval - remainder) % interval
    return [add_days(start, offset) for offset in range(first_offset, days_between(start, end) + 1, interval)]


def _weekly_dates(anchor: date, interval: int, days_of_week: frozenset[int], start: date, end: date) -> list[date]:
    if interval < 1 or not days_of_week:
        return []

    dates = []
    for day in each_day(start, end):
        if day_of_week(day) not in days_of_week:
            continue
        # Weeks are counted from the anchor date, not the calendar week.
        # interval == 1 matches every selected weekday without the modulo check.
        week_index = days_between(anchor, day) // DAYS_PER_WEEK
        if interval == 1 or week_index % interval == 0:
            dates.append(day)
    return dates


def next_occurrence(chore: Chore, after: date) -> date | None:
    """Find the earliest occurrence strictly after `after`.

    Recurring chores are searched one day at a time for at most a year.
    Weekly chores only match on weekday here; the week interval is not
    applied, so a skipped week's day can be returned.

    Args:
        chore: Chore definition
        after: Reference date (exclusive)

    Returns:
        The next occurrence date, or None if there is none within the search
        bound or the supported date range
    """
    recurrence = chore.recurrence

    if recurrence.type == RecurrenceType.NONE:
        return chore.due_date if chore.due_date > after else None

    base = max(after, chore.due_date)
    search_days = min(Constants.NEXT_OCCURRENCE_SEARCH_DAYS, days_between(base, date.max))
    for step in range(1, search_days + 1):
        current = add_days(base, step)

        if recurrence.end_date is not None and current > recurrence.end_date:
            return None

        if recurrence.type == RecurrenceType.DAILY:
            if recurrence.interval >= 1 and days_between(chore.due_date, current) % recurrence.interval == 0:
                return current
        elif recurrence.type == RecurrenceType.WEEKLY:
            if day_of_week(current) in recurrence.days_of_week:
                return current

    return None


def describe_recurrence(recurrence: Recurrence) -> str:
    """Convert a recurrence rule to human-readable text.

    Args:
        recurrence: Recurrence rule

    Returns:
        Description such as "Every 3 days" or "Every 2 weeks on Mon, Thu until 2024-06-30"
    """
    if recurrence.type == RecurrenceType.NONE:
        return "Does not repeat"

    if recurrence.type == RecurrenceType.DAILY:
        text = "Every day" if recurrence.interval == 1 else f"Every {recurrence.interval} days"
    else:
        days = ", ".join(WEEKDAY_LABELS[d] for d in sorted(recurrence.days_of_week)) or "no days"
        if recurrence.interval == 1:
            text = f"Weekly on {days}"
        else:
            text = f"Every {recurrence.interval} weeks on {days}"

    if recurrence.end_date is not None:
        text += f" until {format_iso(recurrence.end_date)}"
    return text
