"""Pydantic models for validating chore and team member input."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from chore_tracker.core.config import Constants
from chore_tracker.domain.chore import Category, Priority, Recurrence, RecurrenceType
from chore_tracker.domain.team import COLOR_RE


class ChoreCreate(BaseModel):
    """Input for creating or editing a chore."""

    title: str = Field(..., description="Chore title")
    description: str = Field(default="", description="Detailed chore description")
    assignee_id: str | None = Field(default=None, description="Team member ID, blank for unassigned")
    category: Category = Field(default=Category.OTHER, description="Chore category")
    priority: Priority = Field(default=Priority.MEDIUM, description="Chore priority")
    due_date: date = Field(..., description="First (or only) due date")
    recurrence_type: RecurrenceType = Field(default=RecurrenceType.NONE, description="Recurrence kind")
    interval: int = Field(
        default=1,
        ge=Constants.MIN_RECURRENCE_INTERVAL,
        le=Constants.MAX_RECURRENCE_INTERVAL,
        description="Repeat every N days or weeks",
    )
    days_of_week: list[int] = Field(default_factory=list, description="Weekdays for weekly chores (0 = Sunday)")
    end_date: date | None = Field(default=None, description="Optional last day of the recurrence")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title is non-empty after trimming."""
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be empty")
        if len(v) > Constants.MAX_TITLE_LENGTH:
            raise ValueError(f"Title too long (max {Constants.MAX_TITLE_LENGTH} characters)")
        return v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()

    @field_validator("assignee_id")
    @classmethod
    def blank_assignee_is_none(cls, v: str | None) -> str | None:
        """Treat an empty assignee selection as unassigned."""
        if v is None or not v.strip():
            return None
        return v

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, v: list[int]) -> list[int]:
        """Validate weekdays are 0-6 and drop duplicates."""
        for day in v:
            if not 0 <= day <= 6:  # noqa: PLR2004
                msg = f"Day of week must be between 0 (Sunday) and 6 (Saturday), got {day}"
                raise ValueError(msg)
        return sorted(set(v))

    def to_recurrence(self) -> Recurrence:
        """Build the embedded recurrence rule from the form fields."""
        return Recurrence(
            type=self.recurrence_type,
            interval=self.interval,
            days_of_week=frozenset(self.days_of_week),
            end_date=self.end_date,
        )


class TeamMemberCreate(BaseModel):
    """Input for adding a team member."""

    name: str = Field(..., description="Display name of the member")
    color: str | None = Field(default=None, description="Display color, picked from the palette when omitted")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name is non-empty and not too long."""
        v = v.strip()

        if not v:
            raise ValueError("Name cannot be empty")

        if len(v) > Constants.MAX_NAME_LENGTH:
            raise ValueError(f"Name too long (max {Constants.MAX_NAME_LENGTH} characters)")

        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        """Validate color is a #RRGGBB hex string if provided."""
        if v is not None and not COLOR_RE.match(v):
            msg = "Color must be a hex string like #4CAF50"
            raise ValueError(msg)
        return v
