"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - ServiceResult: Use for expected failures (validation, business rules)
    - Exceptions: Use for unexpected failures (database errors, bugs)

    Application errors (core.exceptions) may be raised inside a service to
    short-circuit deep call chains; the public service method converts them
    with ServiceResult.from_error() before returning.

Usage:
    from core.services import BaseService, ServiceResult

    class UserService(BaseService):
        @classmethod
        def create_user(cls, username: str, email: str) -> ServiceResult[User]:
            if User.objects.filter(username=username).exists():
                return ServiceResult.failure(
                    "Username already exists",
                    error_code="DUPLICATE_HANDLE",
                )

            with cls.atomic():
                user = User.objects.create(username=username, email=email)

            cls.get_logger().info(f"Created user {user.id}")
            return ServiceResult.success(user)

    # In view
    result = UserService.create_user(username, email)
    if result.success:
        return Response(UserSerializer(result.data).data, status=201)
    return Response(result.to_response(), status=409)

Related:
    - core.exceptions: Application error hierarchy with error codes
    - core.views: ServiceResponseMixin maps error codes to HTTP statuses
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

    from core.exceptions import BaseApplicationError

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, business rule violations).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors or error details for failures

    Usage:
        # Success case
        return ServiceResult.success(chat)

        # Failure case
        return ServiceResult.failure("Chat not found", "CHAT_NOT_FOUND")

        # From a raised application error
        try:
            guard.require_membership(chat_id, user_id)
        except NotAMemberError as e:
            return ServiceResult.from_error(e)
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, Any] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, Any] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors or structured details

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @classmethod
    def from_error(cls, exc: BaseApplicationError) -> ServiceResult[T]:
        """
        Create a failed result from an application error.

        Keeps the error's message, code and details intact so the
        HTTP layer can report them unchanged.

        Args:
            exc: The raised application error

        Returns:
            ServiceResult with error details from the exception
        """
        return cls(
            success=False,
            error=exc.message,
            error_code=exc.error_code,
            errors=exc.details or None,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns:
            Dict with success status and data or error details
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management
    - Exception handling patterns

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back.

        Example:
            with cls.atomic():
                user = User.objects.create(username=username, email=email)
        """
        with transaction.atomic():
            yield
