"""User-friendly error messages for approxidate.

Maps error codes to short human-readable messages and recovery suggestions so
the command line never shows raw tracebacks for bad input.
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Message Catalog
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    # Parse errors
    "DATE_PARSE_ERROR": "The date could not be understood.",
    "INVALID_CALENDAR_FIELD": "The date contains an impossible year, month or day.",
    "AMBIGUOUS_DATE_UNRESOLVED": "The numeric date is ambiguous and no reading is close to today.",
    "MALFORMED_OFFSET": "The time zone offset is not a valid +HHMM value.",
    "NO_RECOGNIZABLE_TOKEN": "Nothing in the text looks like a date.",
    # Configuration errors
    "CONFIGURATION_ERROR": "There's a configuration issue.",
    "UNKNOWN_FORMAT_NAME": "The date format name is not recognized.",
    "INVALID_CONFIG": "The configuration is invalid. Check settings.",
    # Generic
    "APPROXIDATE_ERROR": "An unexpected error occurred. Please try again.",
    "UNKNOWN_ERROR": "Something went wrong. Please try again.",
}


# =============================================================================
# Recovery Suggestions
# =============================================================================

RECOVERY_SUGGESTIONS: dict[str, str] = {
    "DATE_PARSE_ERROR": "Use a date like '2024-03-05 10:00 +0200' or a phrase like '3 days ago'.",
    "INVALID_CALENDAR_FIELD": "Years must be between 1583 and 2999; check the day exists in that month.",
    "AMBIGUOUS_DATE_UNRESOLVED": "Write the year first, e.g. '2003-01-02', to avoid ambiguity.",
    "MALFORMED_OFFSET": "Offsets look like +0200, -05:30 or +01.",
    "NO_RECOGNIZABLE_TOKEN": "Try '2 weeks ago', 'yesterday noon' or 'last friday'.",
    "CONFIGURATION_ERROR": "Check config: approxidate config show",
    "UNKNOWN_FORMAT_NAME": (
        "Valid formats: relative, iso8601 (iso), iso8601-strict (iso-strict), "
        "rfc2822 (rfc), short, local, default, raw."
    ),
    "INVALID_CONFIG": "Recreate the file with: approxidate config init",
    "APPROXIDATE_ERROR": "If this persists, please report the issue.",
    "UNKNOWN_ERROR": "If this persists, please report the issue.",
}


# =============================================================================
# Helper Functions
# =============================================================================


def _error_code(error: Any) -> str:
    if hasattr(error, "code"):
        return error.code
    if isinstance(error, str):
        return error
    return type(error).__name__.upper()


def get_user_message(error: Any) -> str:
    """Get user-friendly message for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        User-friendly error message
    """
    return ERROR_MESSAGES.get(_error_code(error), ERROR_MESSAGES["UNKNOWN_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    """Get recovery suggestion for an error."""
    return RECOVERY_SUGGESTIONS.get(_error_code(error), RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"])


def format_error_for_user(error: Any) -> str:
    """Format a complete user-friendly error message.

    Args:
        error: The error to format

    Returns:
        Complete error message with recovery suggestion
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)

    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Format error for CLI output, including the error code and details."""
    code = getattr(error, "code", "ERROR")
    lines = [
        f"Error [{code}]: {get_user_message(error)}",
        "",
        f"Suggestion: {get_recovery_suggestion(error)}",
    ]

    details = getattr(error, "details", None)
    if details:
        lines.append("")
        lines.append("Details:")
        for key, value in details.items():
            lines.append(f"  {key}: {value}")

    return "\n".join(lines)


__all__ = [
    "ERROR_MESSAGES",
    "RECOVERY_SUGGESTIONS",
    "get_user_message",
    "get_recovery_suggestion",
    "format_error_for_user",
    "format_error_for_cli",
]
