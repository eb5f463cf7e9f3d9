"""Chore collection operations.

The caller owns the authoritative chore collection. Every function here takes
that collection as an immutable tuple and returns a new tuple; records are
replaced, never mutated in place.
"""

import uuid
from datetime import UTC, date, datetime

from chore_tracker.core.dates import format_iso
from chore_tracker.domain.chore import Chore
from chore_tracker.domain.create_models import ChoreCreate


Chores = tuple[Chore, ...]


def generate_id() -> str:
    """Generate an opaque unique identifier for a new record."""
    return str(uuid.uuid4())


def build_chore(data: ChoreCreate, existing: Chore | None = None) -> Chore:
    """Build a chore record from validated input.

    When editing, the existing chore's id, creation time, and completion
    history are kept.

    Args:
        data: Validated chore input
        existing: Chore being edited, or None for a new chore

    Returns:
        The new chore record
    """
    return Chore(
        id=existing.id if existing else generate_id(),
        title=data.title,
        description=data.description,
        assignee_id=data.assignee_id,
        category=data.category,
        priority=data.priority,
        due_date=data.due_date,
        recurrence=data.to_recurrence(),
        completed_dates=existing.completed_dates if existing else frozenset(),
        created_at=existing.created_at if existing else datetime.now(UTC),
    )


def get_chore(chores: Chores, chore_id: str) -> Chore:
    """Look up a chore by id.

    Raises:
        KeyError: If no chore has that id
    """
    for chore in chores:
        if chore.id == chore_id:
            return chore
    raise KeyError(f"Chore not found: {chore_id}")


def add_chore(chores: Chores, chore: Chore) -> Chores:
    """Return the collection with `chore` appended."""
    return (*chores, chore)


def update_chore(chores: Chores, updated: Chore) -> Chores:
    """Return the collection with the chore of the same id replaced.

    Raises:
        KeyError: If no chore has the updated chore's id
    """
    get_chore(chores, updated.id)
    return tuple(updated if chore.id == updated.id else chore for chore in chores)


def delete_chore(chores: Chores, chore_id: str) -> Chores:
    """Return the collection without the given chore.

    Raises:
        KeyError: If no chore has that id
    """
    get_chore(chores, chore_id)
    return tuple(chore for chore in chores if chore.id != chore_id)


def toggle_completion(chores: Chores, chore_id: str, day: date) -> Chores:
    """Flip the completion state of one occurrence.

    The date is not checked against the chore's recurrence.

    Raises:
        KeyError: If no chore has that id
    """
    chore = get_chore(chores, chore_id)
    key = format_iso(day)
    if key in chore.completed_dates:
        completed = chore.completed_dates - {key}
    else:
        completed = chore.completed_dates | {key}
    return update_chore(chores, chore.model_copy(update={"completed_dates": completed}))


def unassign_member(chores: Chores, member_id: str) -> Chores:
    """Clear the assignee on every chore assigned to `member_id`."""
    return tuple(
        chore.model_copy(update={"assignee_id": None}) if chore.assignee_id == member_id else chore
        for chore in chores
    )
