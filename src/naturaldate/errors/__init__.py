"""Centralized error definitions for naturaldate.

This module provides a unified error hierarchy and user-friendly error
handling for callers that turn free text into timestamps.

Usage:
    from naturaldate.errors import ParseError, handle_error

    try:
        when, expr_type = parse(text, reference)
    except ParseError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from typing import Optional

from naturaldate.errors.user_messages import (
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)
from naturaldate.types import ExprType


# =============================================================================
# Base Error
# =============================================================================


class NaturalDateError(Exception):
    """Base exception for all naturaldate errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the error is potentially recoverable
        details: Additional error details for debugging
    """

    code: str = "NATURALDATE_ERROR"
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
# Parse Errors
# =============================================================================


class ParseError(NaturalDateError):
    """Text holds no recognisable expression, or one that cannot be completed.

    Attributes:
        offset: UTF-8 byte offset of the offending input
        line: 1-based line of the offending input
        column: 1-based character column of the offending input
        snippet: Literal text that could not be matched
        expr_type: Always ``ExprType.INVALID``
    """

    code = "PARSE_ERROR"
    default_message = "parse error"
    expr_type = ExprType.INVALID

    def __init__(
        self,
        *,
        offset: int,
        line: int,
        column: int,
        snippet: str,
        message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.offset = offset
        self.line = line
        self.column = column
        self.snippet = snippet
        merged = {"offset": offset, "line": line, "column": column, "snippet": snippet}
        merged.update(details or {})
        super().__init__(
            message or f'parse error near "{snippet}" (line {line}, column {column})',
            details=merged,
        )

    @classmethod
    def at(
        cls,
        text: str,
        start: int,
        end: Optional[int] = None,
        *,
        details: dict | None = None,
    ) -> "ParseError":
        """Build an error for ``text[start:end]`` with its position."""
        if end is None:
            end = len(text)
        line = text.count("\n", 0, start) + 1
        column = start - (text.rfind("\n", 0, start) + 1) + 1
        return cls(
            offset=len(text[:start].encode("utf-8")),
            line=line,
            column=column,
            snippet=text[start:end],
            details=details,
        )


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(NaturalDateError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"
    recoverable = True


class InvalidConfigError(ConfigurationError):
    """Configuration is invalid."""

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
    """Check if an error is potentially recoverable.

    Args:
        error: The exception to check

    Returns:
        True if the error is recoverable
    """
    if isinstance(error, NaturalDateError):
        return error.recoverable
    return False


__all__ = [
    # Base
    "NaturalDateError",
    # Parse
    "ParseError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    # Handlers
    "handle_error",
    "is_recoverable",
]
