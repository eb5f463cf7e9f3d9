"""Pytest configuration and fixtures for unit tests."""

from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Any

import pytest

from chore_tracker.core.memory_store import InMemoryStore
from chore_tracker.domain.chore import Chore, Recurrence, RecurrenceType
from chore_tracker.domain.team import TeamMember
from chore_tracker.services.storage_service import ChoreStore


@pytest.fixture
def make_chore() -> Callable[..., Chore]:
    """Factory for chores with sensible defaults.

    Recurrence fields can be passed directly (recurrence_type, interval,
    days_of_week, end_date); any other keyword overrides a Chore field.
    """
    counter = iter(range(1, 10_000))

    def _make(
        *,
        due_date: date = date(2024, 1, 1),
        recurrence_type: RecurrenceType = RecurrenceType.NONE,
        interval: int = 1,
        days_of_week: set[int] | None = None,
        end_date: date | None = None,
        **overrides: Any,
    ) -> Chore:
        chore_id = overrides.pop("id", f"chore-{next(counter)}")
        fields: dict[str, Any] = {
            "id": chore_id,
            "title": f"Chore {chore_id}",
            "due_date": due_date,
            "recurrence": Recurrence(
                type=recurrence_type,
                interval=interval,
                days_of_week=frozenset(days_of_week or ()),
                end_date=end_date,
            ),
            "created_at": datetime(2023, 12, 1, tzinfo=UTC),
        }
        fields.update(overrides)
        return Chore(**fields)

    return _make


@pytest.fixture
def make_member() -> Callable[..., TeamMember]:
    """Factory for team members."""
    counter = iter(range(1, 10_000))

    def _make(name: str = "Alex", color: str = "#4CAF50", **overrides: Any) -> TeamMember:
        member_id = overrides.pop("id", f"member-{next(counter)}")
        return TeamMember(id=member_id, name=name, color=color, **overrides)

    return _make


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Provides a fresh in-memory key/value backend for each test."""
    return InMemoryStore()


@pytest.fixture
def chore_store(memory_store: InMemoryStore) -> ChoreStore:
    """Provides a ChoreStore backed by the in-memory store."""
    return ChoreStore(memory_store, chores_key="chores", team_members_key="teamMembers")
