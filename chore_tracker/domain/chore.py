"""Chore domain models and enums."""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Category(StrEnum):
    """Chore category."""

    CLEANING = "cleaning"
    ADMIN = "admin"
    MAINTENANCE = "maintenance"
    OTHER = "other"


class Priority(StrEnum):
    """Chore priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecurrenceType(StrEnum):
    """How a chore repeats."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"


class Recurrence(BaseModel):
    """Recurrence rule embedded in a chore."""

    model_config = ConfigDict(frozen=True)

    type: RecurrenceType = Field(default=RecurrenceType.NONE, description="Recurrence kind")
    interval: int = Field(default=1, ge=1, description="Step in days (daily) or weeks (weekly)")
    days_of_week: frozenset[int] = Field(
        default_factory=frozenset,
        description="Weekday numbers for weekly recurrence (0 = Sunday)",
    )
    end_date: date | None = Field(default=None, description="Last day an occurrence may fall on")

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, v: frozenset[int]) -> frozenset[int]:
        """Validate weekday numbers are within 0-6."""
        invalid = sorted(d for d in v if not 0 <= d <= 6)  # noqa: PLR2004
        if invalid:
            msg = f"Days of week must be between 0 (Sunday) and 6 (Saturday), got {invalid}"
            raise ValueError(msg)
        return v

    @field_serializer("days_of_week")
    def serialize_days_of_week(self, v: frozenset[int]) -> list[int]:
        return sorted(v)


class Chore(BaseModel):
    """Chore definition, persisted as a whole-record snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique chore ID")
    title: str = Field(..., description="Chore title (e.g., 'Water the plants')")
    description: str = Field(default="", description="Detailed chore description")
    assignee_id: str | None = Field(default=None, description="Team member ID, or None when unassigned")
    category: Category = Field(default=Category.OTHER, description="Chore category")
    priority: Priority = Field(default=Priority.MEDIUM, description="Chore priority")
    due_date: date = Field(..., description="Anchor date of the recurrence (or the only occurrence)")
    recurrence: Recurrence = Field(default_factory=Recurrence, description="Recurrence rule")
    completed_dates: frozenset[str] = Field(
        default_factory=frozenset,
        description="ISO dates (YYYY-MM-DD) of completed occurrences",
    )
    created_at: datetime = Field(..., description="Creation timestamp")

    @field_serializer("completed_dates")
    def serialize_completed_dates(self, v: frozenset[str]) -> list[str]:
        return sorted(v)

    def is_completed_on(self, day: str) -> bool:
        """Check whether the occurrence on the given ISO date is completed."""
        return day in self.completed_dates


class ChoreInstance(BaseModel):
    """A single dated occurrence of a chore. Derived on demand, never stored."""

    model_config = ConfigDict(frozen=True)

    chore: Chore
    date: str = Field(..., description="Occurrence date (YYYY-MM-DD)")
    is_completed: bool = Field(default=False, description="Whether this occurrence is completed")
