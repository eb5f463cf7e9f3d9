"""Error classification utilities for chore tracker operations."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel
from redis.exceptions import RedisError


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Chore errors
    ERR_CHORE_NOT_FOUND = "ERR_CHORE_NOT_FOUND"
    ERR_INVALID_DATE = "ERR_INVALID_DATE"

    # Team errors
    ERR_MEMBER_NOT_FOUND = "ERR_MEMBER_NOT_FOUND"

    # Input errors
    ERR_VALIDATION = "ERR_VALIDATION"

    # Storage errors
    ERR_STORAGE_UNAVAILABLE = "ERR_STORAGE_UNAVAILABLE"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_ERROR_PATTERNS: dict[
    Literal["date", "storage"],
    dict[str, list[str] | set[str]],
] = {
    "date": {
        "phrases": [
            "invalid date",
            "yyyy-mm-dd",
            "month must be",
            "day is out of range",
        ],
        "exception_types": set(),
    },
    "storage": {
        "phrases": [
            "connection",
            "timeout",
            "redis",
        ],
        "exception_types": {"ConnectionError", "TimeoutError"},
    },
}


def _match_error_pattern(
    *,
    error_str: str,
    exception_type: str,
    pattern_type: Literal["date", "storage"],
) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def classify_error_with_response(exception: Exception) -> ErrorResponse:  # noqa: PLR0911
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised while handling a request

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    if isinstance(exception, KeyError) and "chore not found" in error_str:
        return ErrorResponse(
            code=ErrorCode.ERR_CHORE_NOT_FOUND,
            message="I couldn't find that chore.",
            suggestion="List chores to see the current chore IDs.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, KeyError) and "member not found" in error_str:
        return ErrorResponse(
            code=ErrorCode.ERR_MEMBER_NOT_FOUND,
            message="I couldn't find that team member.",
            suggestion="List the team to see current member IDs.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, RedisError) or _match_error_pattern(
        error_str=error_str, exception_type=exception_type, pattern_type="storage"
    ):
        return ErrorResponse(
            code=ErrorCode.ERR_STORAGE_UNAVAILABLE,
            message="Chore storage is currently unavailable.",
            suggestion="Please try again in a moment.",
            severity=ErrorSeverity.HIGH,
        )

    if isinstance(exception, ValueError):
        if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="date"):
            return ErrorResponse(
                code=ErrorCode.ERR_INVALID_DATE,
                message="Invalid date.",
                suggestion="Dates must be real calendar days written as YYYY-MM-DD.",
                severity=ErrorSeverity.LOW,
            )
        return ErrorResponse(
            code=ErrorCode.ERR_VALIDATION,
            message="Some of the submitted values are invalid.",
            suggestion="Check the fields and try again.",
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
