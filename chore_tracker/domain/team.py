"""Team member domain model."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class TeamMember(BaseModel):
    """Office team member that chores can be assigned to."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique member ID")
    name: str = Field(..., description="Display name of the member")
    color: str = Field(..., description="Display color as #RRGGBB")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate color is a #RRGGBB hex string."""
        if not COLOR_RE.match(v):
            msg = "Color must be a hex string like #4CAF50"
            raise ValueError(msg)
        return v.upper()
