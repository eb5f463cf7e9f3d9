"""Configuration management for chore_tracker."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Deployment environment name")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # Redis Configuration (optional, in-memory storage is used when unset)
    redis_url: str | None = Field(default=None, description="Redis connection URL (e.g., redis://localhost:6379)")

    # Storage keys for the whole-document snapshots
    chores_key: str = Field(default="chores", description="Storage key holding the chore list")
    team_members_key: str = Field(default="teamMembers", description="Storage key holding the team member list")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Recurrence
    NEXT_OCCURRENCE_SEARCH_DAYS: int = 365  # next_occurrence never looks further than a year out
    MIN_RECURRENCE_INTERVAL: int = 1
    MAX_RECURRENCE_INTERVAL: int = 30  # Upper bound accepted from chore forms

    # Validation
    MAX_NAME_LENGTH: int = 50
    MAX_TITLE_LENGTH: int = 200

    # Team member display colors, assigned in order
    TEAM_COLORS: tuple[str, ...] = (
        "#4CAF50",
        "#2196F3",
        "#FF9800",
        "#9C27B0",
        "#E91E63",
        "#00BCD4",
        "#FF5722",
        "#3F51B5",
        "#009688",
        "#FFC107",
    )

    # Redis Configuration
    REDIS_MAX_CONNECTIONS: int = 10  # Maximum connections in Redis connection pool
    REDIS_WRITE_MAX_RETRIES: int = 3
    REDIS_RETRY_BASE_DELAY_SECONDS: float = 0.1


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
