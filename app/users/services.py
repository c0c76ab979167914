"""
User services.

This module provides the UserService class for creating, listing and
updating users.

Related files:
    - models.py: User
    - exceptions.py: DuplicateHandleError, DuplicateAddressError, UserNotFoundError
    - serializers.py: Request validation before the service is called

Uniqueness:
    - Handle collisions are reported before address collisions
    - The pre-check is repeated when the insert loses a race and the
      unique constraint fires, so callers always get a domain error code
"""

from __future__ import annotations

from django.db import IntegrityError
from django.db.models import Q

from core.exceptions import BaseApplicationError
from core.services import BaseService, ServiceResult

from users.exceptions import (
    DuplicateAddressError,
    DuplicateHandleError,
    UserNotFoundError,
)
from users.models import User


class UserService(BaseService):
    """
    Service for the user directory.

    Methods:
        create_user: Register a new user with a unique handle and address
        list_users: All users in creation order
        get_user: Fetch a single user by id
        update_avatar: Set or clear the user's avatar

    Usage:
        from users.services import UserService

        result = UserService.create_user("alice", "alice@example.com")
        if result.success:
            user = result.data
    """

    @classmethod
    def create_user(
        cls,
        username: str,
        email: str,
        avatar_url: str | None = None,
    ) -> ServiceResult[User]:
        """
        Create a new user.

        Args:
            username: Unique handle (3-50 characters, validated by the serializer)
            email: Unique contact address
            avatar_url: Optional avatar reference

        Returns:
            ServiceResult with the new User

        Error codes:
            DUPLICATE_HANDLE: Username already taken
            DUPLICATE_ADDRESS: Email already registered
        """
        try:
            cls._check_unique(username, email)
        except BaseApplicationError as e:
            return ServiceResult.from_error(e)

        try:
            with cls.atomic():
                user = User.objects.create(
                    username=username,
                    email=email,
                    avatar_url=avatar_url,
                )
        except IntegrityError:
            # Lost a race against a concurrent insert of the same handle/address
            cls.get_logger().warning(
                f"Unique constraint hit creating user {username!r}; "
                f"re-checking for duplicates"
            )
            try:
                cls._check_unique(username, email)
            except BaseApplicationError as e:
                return ServiceResult.from_error(e)
            raise

        cls.get_logger().info(f"Created user {user.id} ({user.username})")
        return ServiceResult.success(user)

    @classmethod
    def list_users(cls) -> list[User]:
        """Return every user, oldest first."""
        return list(User.objects.order_by("created_at", "id"))

    @classmethod
    def get_user(cls, user_id: int) -> ServiceResult[User]:
        """
        Fetch a user by id.

        Error codes:
            USER_NOT_FOUND: No user with this id
        """
        try:
            return ServiceResult.success(User.objects.get(pk=user_id))
        except User.DoesNotExist:
            return ServiceResult.from_error(
                UserNotFoundError(details={"user_id": user_id})
            )

    @classmethod
    def update_avatar(
        cls,
        user_id: int,
        avatar_url: str | None,
    ) -> ServiceResult[User]:
        """
        Set or clear a user's avatar.

        Only the avatar is mutable; handle and address never change.

        Args:
            user_id: User to update
            avatar_url: New avatar reference, or None to clear it

        Returns:
            ServiceResult with the updated User

        Error codes:
            USER_NOT_FOUND: No user with this id
        """
        result = cls.get_user(user_id)
        if not result.success:
            return result

        user = result.data
        user.avatar_url = avatar_url
        user.save(update_fields=["avatar_url", "updated_at"])

        cls.get_logger().info(f"Updated avatar for user {user.id}")
        return ServiceResult.success(user)

    @staticmethod
    def _check_unique(username: str, email: str) -> None:
        """Raise the matching duplicate error, handle first."""
        clashes = list(
            User.objects.filter(Q(username=username) | Q(email=email)).values_list(
                "username", "email"
            )
        )
        if any(existing_username == username for existing_username, _ in clashes):
            raise DuplicateHandleError(details={"username": username})
        if clashes:
            raise DuplicateAddressError(details={"email": email})
