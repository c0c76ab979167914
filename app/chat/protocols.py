"""
Storage port for the chat core.

The chat services never touch the ORM directly; they depend on the
ChatStore protocol below. DjangoChatStore (repositories.py) is the
production adapter, and the tests substitute an in-memory implementation.

Capabilities:
    - Unit of work: atomic()
    - Insert: create_chat, add_membership, add_message
    - Query: get_chat, missing_user_ids, user_exists, is_member,
      get_membership, list_members, list_user_chats, list_messages,
      last_message, count_messages_after
    - Conditional update: advance_activity, advance_last_read

Usage:
    from chat.protocols import ChatStore

    def unread(store: ChatStore, chat_id: int, user_id: int) -> int:
        membership = store.get_membership(chat_id, user_id)
        ...

Note:
    Insert operations raise django.db.IntegrityError when a uniqueness
    constraint is violated, whatever the backing store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from contextlib import AbstractContextManager
    from datetime import datetime

    from chat.models import Chat, Membership, Message
    from users.models import User


@runtime_checkable
class ChatStore(Protocol):
    """
    Protocol for chat persistence.

    Example:
        class InMemoryChatStore:
            def atomic(self): ...
            def create_chat(self, *, name, is_group, avatar_url): ...
            ...

        store: ChatStore = InMemoryChatStore()
    """

    def atomic(self) -> AbstractContextManager[None]:
        """
        Run the enclosed operations as one unit of work.

        An exception leaving the block discards every write made inside it.
        """
        ...

    # -------------------------------------------------------------------------
    # Chats
    # -------------------------------------------------------------------------

    def create_chat(
        self,
        *,
        name: str | None,
        is_group: bool,
        avatar_url: str | None,
    ) -> Chat:
        """Insert a chat with no activity yet."""
        ...

    def get_chat(self, chat_id: int) -> Chat | None:
        """Return the chat, or None if it does not exist."""
        ...

    def advance_activity(self, chat_id: int, at: datetime) -> bool:
        """
        Move the chat's activity timestamp forward to ``at``.

        Leaves it unchanged when it is already at or past ``at``.

        Returns:
            True if the timestamp changed
        """
        ...

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def user_exists(self, user_id: int) -> bool:
        """Return True if the user exists."""
        ...

    def missing_user_ids(self, user_ids: Sequence[int]) -> list[int]:
        """Return the ids that match no user, in input order."""
        ...

    # -------------------------------------------------------------------------
    # Memberships
    # -------------------------------------------------------------------------

    def add_membership(self, chat_id: int, user_id: int) -> Membership:
        """
        Insert a membership with no read watermark.

        Raises:
            IntegrityError: The user already belongs to the chat
        """
        ...

    def is_member(self, chat_id: int, user_id: int) -> bool:
        """Return True if the user belongs to the chat."""
        ...

    def get_membership(self, chat_id: int, user_id: int) -> Membership | None:
        """Return the membership, or None."""
        ...

    def list_members(self, chat_id: int) -> list[User]:
        """Return the chat's members in join order."""
        ...

    def list_user_chats(self, user_id: int) -> list[Chat]:
        """Return every chat the user belongs to, in no particular order."""
        ...

    def advance_last_read(self, chat_id: int, user_id: int, at: datetime) -> int:
        """
        Move the member's read watermark forward to ``at``.

        Leaves it unchanged when it is already at or past ``at``.

        Returns:
            Number of memberships updated (0 or 1)
        """
        ...

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def add_message(
        self,
        chat_id: int,
        sender_id: int,
        content: str,
        message_type: str,
    ) -> Message:
        """Insert a message whose created_at and updated_at are equal."""
        ...

    def list_messages(self, chat_id: int, limit: int, offset: int) -> list[Message]:
        """
        Return a page of messages, newest first, with senders loaded.

        Ties on created_at are ordered by id, highest first.
        """
        ...

    def last_message(self, chat_id: int) -> Message | None:
        """Return the newest message with its sender, or None."""
        ...

    def count_messages_after(self, chat_id: int, after: datetime) -> int:
        """Count messages created strictly after ``after``."""
        ...
