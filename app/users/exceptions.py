"""
User-specific exceptions.

Exception Hierarchy:
    NotFoundError
    └── UserNotFoundError - Referenced user does not exist
    ConflictError
    ├── DuplicateHandleError - Username already taken
    └── DuplicateAddressError - E-mail address already registered

Usage:
    from users.exceptions import UserNotFoundError

    if not User.objects.filter(pk=user_id).exists():
        raise UserNotFoundError(details={"user_id": user_id})
"""

from core.exceptions import ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a referenced user does not exist."""

    default_error_code: str = "USER_NOT_FOUND"
    default_message: str = "User not found"


class DuplicateHandleError(ConflictError):
    """Raised when a username is already taken."""

    default_error_code: str = "DUPLICATE_HANDLE"
    default_message: str = "Username already exists"


class DuplicateAddressError(ConflictError):
    """Raised when an e-mail address is already registered."""

    default_error_code: str = "DUPLICATE_ADDRESS"
    default_message: str = "Email already exists"
