"""Domain models and DTOs."""

from chore_tracker.domain.chore import Category, Chore, ChoreInstance, Priority, Recurrence, RecurrenceType
from chore_tracker.domain.create_models import ChoreCreate, TeamMemberCreate
from chore_tracker.domain.team import TeamMember


__all__ = [
    "Category",
    "Chore",
    "ChoreCreate",
    "ChoreInstance",
    "Priority",
    "Recurrence",
    "RecurrenceType",
    "TeamMember",
    "TeamMemberCreate",
]
