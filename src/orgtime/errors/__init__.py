"""Centralized error definitions for orgtime.

Parsing and arithmetic in :mod:`orgtime.timestamps` are lenient and never raise
for malformed input. The errors below are reserved for programming mistakes at
typed seams (unknown span keys) and for configuration problems.

Usage:
    from orgtime.errors import OrgTimeError, handle_error

    try:
        settings = load_settings(path)
    except OrgTimeError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from orgtime.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)


# =============================================================================
# Base Error
# =============================================================================


class OrgTimeError(Exception):
    """Base exception for all orgtime errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the error is potentially recoverable
        details: Additional error details for debugging
    """

    code: str = "ORGTIME_ERROR"
    default_message: str = "An unexpected error occurred"
    recoverable: bool = True

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
# Timestamp Errors
# =============================================================================


class TimestampError(OrgTimeError):
    """Base error for timestamp operations."""

    code = "TIMESTAMP_ERROR"
    default_message = "Timestamp operation failed"


class UnknownSpanError(TimestampError, KeyError):
    """A span or field name outside the closed vocabulary was requested."""

    code = "UNKNOWN_SPAN"
    default_message = "Unknown span"
    recoverable = False

    def __init__(self, span: str, *, allowed: tuple[str, ...] = ()) -> None:
        self.span = span
        super().__init__(
            f"Unknown span {span!r}",
            details={"span": span, "allowed": ", ".join(allowed)},
        )

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(OrgTimeError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"
    recoverable = True


class InvalidConfigError(ConfigurationError):
    """Configuration is invalid."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


class MissingConfigError(ConfigurationError):
    """Required configuration is missing."""

    code = "MISSING_CONFIG"
    default_message = "Missing required configuration"


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
    if isinstance(error, OrgTimeError):
        return error.recoverable
    return False


__all__ = [
    # Base
    "OrgTimeError",
    # Timestamps
    "TimestampError",
    "UnknownSpanError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    "MissingConfigError",
    # Handlers
    "format_error_for_cli",
    "handle_error",
    "is_recoverable",
]
