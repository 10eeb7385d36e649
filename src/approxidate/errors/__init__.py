"""Centralized error definitions for approxidate.

Usage:
    from approxidate.errors import DateParseError, handle_error

    try:
        timestamp, offset = parse_absolute(text)
    except DateParseError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from approxidate.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)


# =============================================================================
# Base Error
# =============================================================================


class ApproxidateError(Exception):
    """Base exception for all approxidate errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the caller can reasonably retry with other input
        details: Additional error details for debugging
    """

    code: str = "APPROXIDATE_ERROR"
    default_message: str = "An unexpected error occurred"
    recoverable: bool = False

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message or self.default_message
        self._user_message = user_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Get user-friendly message."""
        if self._user_message:
            return self._user_message
        return get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        """Get recovery suggestion."""
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "recoverable": self.recoverable,
            "details": self.details,
        }


# =============================================================================
# Parse Errors
# =============================================================================


class DateParseError(ApproxidateError):
    """Base error for date interpretation failures."""

    code = "DATE_PARSE_ERROR"
    default_message = "Could not parse date"
    recoverable = True


class InvalidCalendarFieldError(DateParseError):
    """Year, month or day is missing or outside the supported calendar."""

    code = "INVALID_CALENDAR_FIELD"
    default_message = "Invalid calendar field"


class AmbiguousDateUnresolvedError(DateParseError):
    """No field ordering of a numeric date triple is plausible."""

    code = "AMBIGUOUS_DATE_UNRESOLVED"
    default_message = "Ambiguous numeric date could not be resolved"


class MalformedOffsetError(DateParseError):
    """Numeric time zone with minute >= 60, hour >= 24 or a bad shape."""

    code = "MALFORMED_OFFSET"
    default_message = "Malformed time zone offset"


class NoRecognizableTokenError(DateParseError):
    """Neither the structured parser nor the relative resolver found a token."""

    code = "NO_RECOGNIZABLE_TOKEN"
    default_message = "No recognizable date token"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ApproxidateError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"


class UnknownFormatNameError(ConfigurationError):
    """A date format name is not one of the recognized names."""

    code = "UNKNOWN_FORMAT_NAME"
    default_message = "Unknown date format"


class InvalidConfigError(ConfigurationError):
    """Configuration file content failed validation."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


# =============================================================================
# Error Handler
# =============================================================================


def handle_error(error: Exception) -> str:
    """Handle an error and return a user-friendly message.

    Args:
        error: The exception to handle

    Returns:
        User-friendly error message with recovery suggestion
    """
    return format_error_for_user(error)


def is_recoverable(error: Exception) -> bool:
    """Check if an error is potentially recoverable."""
    if isinstance(error, ApproxidateError):
        return error.recoverable
    return False


__all__ = [
    # Base
    "ApproxidateError",
    # Parse
    "DateParseError",
    "InvalidCalendarFieldError",
    "AmbiguousDateUnresolvedError",
    "MalformedOffsetError",
    "NoRecognizableTokenError",
    # Configuration
    "ConfigurationError",
    "UnknownFormatNameError",
    "InvalidConfigError",
    # Handlers
    "handle_error",
    "is_recoverable",
    "format_error_for_cli",
]
