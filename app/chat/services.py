"""
Chat system service layer.

This module provides the business logic for the chat system: who may send
and read messages in a chat, how unread counts are computed, and how a
user's chat list is ordered by activity.

Services:
    ChatService: Chat creation and joining
    MessageService: Message ledger (send, paginated history)
    ReadTrackingService: Read watermarks and unread counts
    ChatListService: Activity-ordered chat summaries for a user

Design Principles:
    - Services are stateless (use class methods)
    - Every operation receives the acting user id explicitly
    - Persistence goes through ChatBaseService.store (a ChatStore)
    - Expected failures return ServiceResult.failure()
    - Multi-row writes run inside store.atomic()

Usage:
    from chat.services import ChatService, MessageService

    result = ChatService.create_chat(
        name="Project Team",
        is_group=True,
        participant_ids=[alice.id, bob.id],
    )
    if result.success:
        chat = result.data

    result = MessageService.send_message(
        chat_id=chat.id,
        sender_id=alice.id,
        content="Hello everyone!",
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db import IntegrityError
from django.utils import timezone

from core.exceptions import BaseApplicationError, ValidationError
from core.services import BaseService, ServiceResult

from chat.authorization import MembershipGuard
from chat.constants import CHAT_CONFIG, EPOCH, MESSAGE_CONFIG
from chat.exceptions import AlreadyMemberError, UnknownParticipantError
from chat.models import MessageType
from chat.repositories import DjangoChatStore
from users.exceptions import UserNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from chat.models import Chat, Membership, Message
    from chat.protocols import ChatStore
    from users.models import User


@dataclass
class ChatSummary:
    """
    One entry of a user's chat list.

    Attributes:
        chat: The chat
        participants: Every member of the chat
        last_message: Newest message, or None for a chat without messages
        unread_count: Messages the requesting user has not read
    """

    chat: Chat
    participants: list[User]
    last_message: Message | None
    unread_count: int

    @property
    def activity_at(self) -> datetime:
        """Newest message time, falling back to the chat's creation time."""
        if self.last_message is not None:
            return self.last_message.created_at
        return self.chat.created_at


class ChatBaseService(BaseService):
    """
    Base class for chat services.

    Holds the storage port shared by every chat service. Replace
    ``ChatBaseService.store`` to run the services on another backend.
    """

    store: ChatStore = DjangoChatStore()

    @classmethod
    def guard(cls) -> MembershipGuard:
        """Membership guard bound to the current store."""
        return MembershipGuard(cls.store)


class ChatService(ChatBaseService):
    """
    Service for chat lifecycle operations.

    Methods:
        create_chat: Create a chat with its initial members
        join_chat: Add a user to an existing group chat
    """

    @classmethod
    def create_chat(
        cls,
        participant_ids: Sequence[int],
        is_group: bool = False,
        name: str | None = None,
        avatar_url: str | None = None,
    ) -> ServiceResult[Chat]:
        """
        Create a chat and its initial memberships atomically.

        Duplicate participant ids are collapsed, keeping the first
        occurrence. Either the chat and every membership are stored, or
        nothing is.

        Args:
            participant_ids: Ids of the initial members (at least one)
            is_group: Whether the chat accepts joins later
            name: Display name, group chats only
            avatar_url: Optional avatar reference

        Returns:
            ServiceResult with the new Chat

        Error codes:
            VALIDATION_ERROR: No participants, or an invalid name
            UNKNOWN_PARTICIPANT: Some ids match no user (details.missing_ids)
        """
        user_ids = list(dict.fromkeys(participant_ids))

        try:
            cls._validate_chat_input(user_ids, is_group, name)

            with cls.store.atomic():
                missing_ids = cls.store.missing_user_ids(user_ids)
                if missing_ids:
                    raise UnknownParticipantError(
                        details={"missing_ids": missing_ids}
                    )

                chat = cls.store.create_chat(
                    name=name,
                    is_group=is_group,
                    avatar_url=avatar_url,
                )
                for user_id in user_ids:
                    cls.store.add_membership(chat.id, user_id)
        except BaseApplicationError as e:
            return ServiceResult.from_error(e)

        cls.get_logger().info(
            f"Created {'group' if is_group else 'direct'} chat {chat.id} "
            f"with {len(user_ids)} member(s)"
        )

        return ServiceResult.success(chat)

    @classmethod
    def join_chat(
        cls,
        chat_id: int,
        user_id: int,
    ) -> ServiceResult[Membership]:
        """
        Add a user to a group chat.

        Checks run in order: chat exists, chat is a group, user exists,
        user is not already a member.

        Args:
            chat_id: Chat to join
            user_id: Joining user

        Returns:
            ServiceResult with the new Membership

        Error codes:
            CHAT_NOT_FOUND: Chat does not exist
            NOT_A_GROUP_CHAT: Chat is one-on-one
            USER_NOT_FOUND: User does not exist
            ALREADY_MEMBER: User already belongs to the chat
        """
        try:
            cls.guard().require_group_chat(chat_id)

            if not cls.store.user_exists(user_id):
                raise UserNotFoundError(details={"user_id": user_id})

            if cls.store.is_member(chat_id, user_id):
                raise AlreadyMemberError(
                    details={"chat_id": chat_id, "user_id": user_id}
                )

            try:
                membership = cls.store.add_membership(chat_id, user_id)
            except IntegrityError:
                cls.get_logger().warning(
                    f"Concurrent join of user {user_id} to chat {chat_id}"
                )
                raise AlreadyMemberError(
                    details={"chat_id": chat_id, "user_id": user_id}
                ) from None
        except BaseApplicationError as e:
            return ServiceResult.from_error(e)

        cls.get_logger().info(f"User {user_id} joined chat {chat_id}")

        return ServiceResult.success(membership)

    @staticmethod
    def _validate_chat_input(
        user_ids: list[int],
        is_group: bool,
        name: str | None,
    ) -> None:
        if len(user_ids) < CHAT_CONFIG.MIN_PARTICIPANTS:
            raise ValidationError(
                "At least one participant is required",
                details={"participant_ids": user_ids},
            )

        if name is None:
            return

        if not is_group:
            raise ValidationError(
                "Only group chats can have a name",
                details={"name": name},
            )
        if not CHAT_CONFIG.NAME_MIN_LENGTH <= len(name) <= CHAT_CONFIG.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Chat name must be {CHAT_CONFIG.NAME_MIN_LENGTH}-"
                f"{CHAT_CONFIG.NAME_MAX_LENGTH} characters",
                details={"name": name},
            )


class MessageService(ChatBaseService):
    """
    Service for the message ledger.

    Methods:
        send_message: Append a message and advance the chat's activity time
        get_chat_messages: Paginated history, newest first
    """

    @classmethod
    def send_message(
        cls,
        chat_id: int,
        sender_id: int,
        content: str,
        message_type: str = MESSAGE_CONFIG.DEFAULT_TYPE,
    ) -> ServiceResult[Message]:
        """
        Send a message to a chat.

        The sender must already be a member; sending never creates a
        membership. The message and the chat activity update are written
        in one transaction, and the activity time only moves forward.

        Args:
            chat_id: Target chat
            sender_id: Acting user
            content: Text, or an image/file reference
            message_type: text (default), image or file

        Returns:
            ServiceResult with the new Message

        Error codes:
            NOT_A_MEMBER: Sender is not a member, or the chat does not exist
            VALIDATION_ERROR: Empty content or unknown message type
        """
        try:
            cls.guard().require_membership(chat_id, sender_id)

            if message_type not in MessageType.values:
                raise ValidationError(
                    f"Unknown message type: {message_type}",
                    details={"message_type": message_type},
                )
            if not content or not content.strip():
                raise ValidationError("Message content cannot be empty")
        except BaseApplicationError as e:
            return ServiceResult.from_error(e)

        with cls.store.atomic():
            message = cls.store.add_message(
                chat_id=chat_id,
                sender_id=sender_id,
                content=content,
                message_type=message_type,
            )
            cls.store.advance_activity(chat_id, message.created_at)

        cls.get_logger().debug(
            f"User {sender_id} sent {message_type} message {message.id} "
            f"to chat {chat_id}"
        )

        return ServiceResult.success(message)

    @classmethod
    def get_chat_messages(
        cls,
        chat_id: int,
        limit: int = MESSAGE_CONFIG.DEFAULT_LIMIT,
        offset: int = 0,
    ) -> ServiceResult[list[Message]]:
        """
        Get a page of a chat's messages, newest first.

        Each message carries its sender, resolved at read time. A chat
        without messages, or one that does not exist, yields an empty list.

        Args:
            chat_id: Chat to read
            limit: Page size (1 to MESSAGE_CONFIG.MAX_LIMIT)
            offset: Number of newer messages to skip

        Returns:
            ServiceResult with the list of messages

        Error codes:
            VALIDATION_ERROR: limit or offset out of range
        """
        if not MESSAGE_CONFIG.MIN_LIMIT <= limit <= MESSAGE_CONFIG.MAX_LIMIT:
            return ServiceResult.failure(
                f"limit must be between {MESSAGE_CONFIG.MIN_LIMIT} "
                f"and {MESSAGE_CONFIG.MAX_LIMIT}",
                error_code="VALIDATION_ERROR",
                errors={"limit": limit},
            )
        if offset < 0:
            return ServiceResult.failure(
                "offset cannot be negative",
                error_code="VALIDATION_ERROR",
                errors={"offset": offset},
            )

        return ServiceResult.success(cls.store.list_messages(chat_id, limit, offset))


class ReadTrackingService(ChatBaseService):
    """
    Service for read watermarks and unread counts.

    Methods:
        mark_read: Move the member's watermark to now
        unread_count: Messages newer than the member's watermark
    """

    @classmethod
    def mark_read(cls, chat_id: int, user_id: int) -> ServiceResult[None]:
        """
        Mark a chat as read for a user.

        The watermark moves to the current time and never backwards.
        Calling this for a user who is not a member changes nothing and
        still succeeds.

        Args:
            chat_id: Chat being read
            user_id: Acting user

        Returns:
            ServiceResult with None
        """
        updated = cls.store.advance_last_read(chat_id, user_id, timezone.now())

        if updated:
            cls.get_logger().debug(f"User {user_id} marked chat {chat_id} as read")
        else:
            cls.get_logger().debug(
                f"Mark-read for user {user_id} in chat {chat_id} changed nothing"
            )

        return ServiceResult.success(None)

    @classmethod
    def unread_count(cls, chat_id: int, user_id: int) -> int:
        """
        Count messages the user has not read.

        A member who never marked the chat read has every message unread.
        The user's own messages count like any other.

        Returns:
            Number of unread messages (0 if the user is not a member)
        """
        membership = cls.store.get_membership(chat_id, user_id)
        if membership is None:
            return 0

        return cls.store.count_messages_after(
            chat_id, membership.last_read_at or EPOCH
        )


class ChatListService(ChatBaseService):
    """
    Service composing a user's chat list.

    Methods:
        get_user_chats: Chat summaries, most recently active first
    """

    @classmethod
    def get_user_chats(cls, user_id: int) -> list[ChatSummary]:
        """
        List the chats a user belongs to, most recently active first.

        Activity is the newest message's time, or the chat's creation time
        when it has no messages. Ties go to the higher chat id. The order
        is computed on every call.

        Args:
            user_id: Acting user

        Returns:
            List of ChatSummary (empty for an unknown user)
        """
        summaries = []
        for chat in cls.store.list_user_chats(user_id):
            # Reads for one chat share a transaction (default isolation)
            with cls.store.atomic():
                summaries.append(
                    ChatSummary(
                        chat=chat,
                        participants=cls.store.list_members(chat.id),
                        last_message=cls.store.last_message(chat.id),
                        unread_count=ReadTrackingService.unread_count(
                            chat.id, user_id
                        ),
                    )
                )

        summaries.sort(key=lambda s: (s.activity_at, s.chat.id), reverse=True)
        return summaries
