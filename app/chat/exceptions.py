"""
Chat-specific exceptions.

Raised by the membership guard and the services; public service methods
convert them to ServiceResult failures before returning.

Exception Hierarchy:
    NotFoundError
    └── ChatNotFoundError - Referenced chat does not exist
    PermissionDeniedError
    └── NotAMemberError - Actor lacks the required membership
    ConflictError
    ├── AlreadyMemberError - User already belongs to the chat
    └── NotAGroupChatError - Operation needs a group chat
    ValidationError
    └── UnknownParticipantError - Participant ids that match no user
"""

from core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


class ChatNotFoundError(NotFoundError):
    """Raised when a referenced chat does not exist."""

    default_error_code: str = "CHAT_NOT_FOUND"
    default_message: str = "Chat not found"


class NotAMemberError(PermissionDeniedError):
    """
    Raised when the acting user is not a member of the chat.

    A chat that does not exist has no members, so a missing chat is
    reported with this error too.
    """

    default_error_code: str = "NOT_A_MEMBER"
    default_message: str = "User is not a member of this chat"


class AlreadyMemberError(ConflictError):
    """Raised when a user joins a chat they already belong to."""

    default_error_code: str = "ALREADY_MEMBER"
    default_message: str = "User is already a member of this chat"


class NotAGroupChatError(ConflictError):
    """Raised when joining a one-on-one chat."""

    default_error_code: str = "NOT_A_GROUP_CHAT"
    default_message: str = "Only group chats can be joined"


class UnknownParticipantError(ValidationError):
    """Raised when participant ids do not all resolve to users."""

    default_error_code: str = "UNKNOWN_PARTICIPANT"
    default_message: str = "One or more participants do not exist"
