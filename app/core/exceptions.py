"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures
    ├── NotFoundError - Resource not found
    ├── PermissionDeniedError - Authorization failures
    └── ConflictError - State conflicts (duplicates, invalid state)

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Message content cannot be empty")

    # Raise with error code for client handling
    raise NotFoundError("Chat not found", error_code="CHAT_NOT_FOUND")

    # Raise with additional details
    raise ValidationError(
        "One or more participant users do not exist",
        error_code="UNKNOWN_PARTICIPANT",
        details={"missing_ids": [7, 9]},
    )

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, parsing, etc.).
    Services convert them to ServiceResult failures before returning.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
    """

    default_error_code: str = "APPLICATION_ERROR"
    default_message: str = "Application error"

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description (defaults to class default)
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message or self.default_message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Chat not found",
                "error_code": "CHAT_NOT_FOUND",
                "details": {"chat_id": 123}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Invalid field formats
    - Missing or empty required values
    - Business rule violations on input shape

    Note:
        For DRF serializer validation, use DRF's built-in validation.
        Use this for service-layer validation logic.
    """

    default_error_code: str = "VALIDATION_ERROR"
    default_message: str = "Validation failed"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Note:
        Consider returning empty results for list queries.
        Use NotFoundError for single-resource lookups where existence is expected.
    """

    default_error_code: str = "NOT_FOUND"
    default_message: str = "Resource not found"


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when the acting user lacks permission for an operation.

    Note:
        There is no authentication layer; this covers authorization
        decisions such as chat membership.
    """

    default_error_code: str = "PERMISSION_DENIED"
    default_message: str = "Permission denied"


class ConflictError(BaseApplicationError):
    """
    Raised when operation conflicts with current resource state.

    Use for:
    - Duplicate entries (unique constraint violations)
    - Invalid state transitions

    Note:
        HTTP 409 Conflict is the appropriate status for these errors.
    """

    default_error_code: str = "CONFLICT"
    default_message: str = "Conflict with current state"
