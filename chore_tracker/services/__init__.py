from chore_tracker.services import (
    calendar_service,
    chore_service,
    storage_service,
    team_service,
)


__all__ = [
    "calendar_service",
    "chore_service",
    "storage_service",
    "team_service",
]
