"""Month and day views built from expanded chore occurrences."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from pydantic import BaseModel, Field

from chore_tracker.core.dates import calendar_window, each_day, format_iso
from chore_tracker.core.recurrence import expand_occurrences
from chore_tracker.domain.chore import Category, Chore, ChoreInstance, Priority


class ChoreFilter(BaseModel):
    """Optional filters applied to chore instances. None means "all"."""

    category: Category | None = Field(default=None, description="Only chores in this category")
    priority: Priority | None = Field(default=None, description="Only chores with this priority")
    assignee_id: str | None = Field(default=None, description="Only chores assigned to this member")

    def matches(self, instance: ChoreInstance) -> bool:
        """Check whether an instance passes every active filter."""
        chore = instance.chore
        if self.category is not None and chore.category != self.category:
            return False
        if self.priority is not None and chore.priority != self.priority:
            return False
        if self.assignee_id is not None and chore.assignee_id != self.assignee_id:
            return False
        return True


class CalendarDay(BaseModel):
    """One cell of the month grid."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    in_month: bool = Field(..., description="False for padding days from adjacent months")
    instances: list[ChoreInstance] = Field(default_factory=list)


class MonthView(BaseModel):
    """Month grid with the chore instances due on each visible day."""

    year: int
    month: int
    window_start: date
    window_end: date
    days: list[CalendarDay]


def filter_instances(instances: Iterable[ChoreInstance], filters: ChoreFilter | None = None) -> list[ChoreInstance]:
    """Keep only the instances that match the filters."""
    if filters is None:
        return list(instances)
    return [instance for instance in instances if filters.matches(instance)]


def month_view(
    chores: Iterable[Chore],
    year: int,
    month: int,
    filters: ChoreFilter | None = None,
) -> MonthView:
    """Build the month grid for a month, padded to whole Sunday-first weeks.

    Args:
        chores: Chore definitions
        year: Calendar year
        month: Calendar month (1-12)
        filters: Optional instance filters

    Returns:
        MonthView with one CalendarDay per visible date
    """
    window_start, window_end = calendar_window(year, month)
    instances = filter_instances(expand_occurrences(chores, window_start, window_end), filters)

    by_day: dict[str, list[ChoreInstance]] = defaultdict(list)
    for instance in instances:
        by_day[instance.date].append(instance)

    days = [
        CalendarDay(date=format_iso(day), in_month=day.month == month, instances=by_day.get(format_iso(day), []))
        for day in each_day(window_start, window_end)
    ]
    return MonthView(year=year, month=month, window_start=window_start, window_end=window_end, days=days)


def day_view(chores: Iterable[Chore], day: date, filters: ChoreFilter | None = None) -> list[ChoreInstance]:
    """List the chore instances due on a single date."""
    return filter_instances(expand_occurrences(chores, day, day), filters)
