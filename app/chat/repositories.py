"""
Django ORM adapter for the chat storage port.

DjangoChatStore implements chat.protocols.ChatStore on top of the Chat,
Membership and Message models. Conditional updates are single UPDATE
statements so concurrent writers never move a timestamp backwards.

Related files:
    - protocols.py: ChatStore interface
    - services.py: The only caller
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from chat.models import Chat, Membership, Message
from users.models import User

if TYPE_CHECKING:
    from collections.abc import Sequence
    from contextlib import AbstractContextManager
    from datetime import datetime


class DjangoChatStore:
    """ChatStore backed by the default database."""

    def atomic(self) -> AbstractContextManager[None]:
        return transaction.atomic()

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
        return Chat.objects.create(
            name=name,
            is_group=is_group,
            avatar_url=avatar_url,
        )

    def get_chat(self, chat_id: int) -> Chat | None:
        return Chat.objects.filter(pk=chat_id).first()

    def advance_activity(self, chat_id: int, at: datetime) -> bool:
        updated = (
            Chat.objects.filter(pk=chat_id)
            .filter(Q(last_message_at__isnull=True) | Q(last_message_at__lt=at))
            .update(last_message_at=at, updated_at=at)
        )
        return updated > 0

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def user_exists(self, user_id: int) -> bool:
        return User.objects.filter(pk=user_id).exists()

    def missing_user_ids(self, user_ids: Sequence[int]) -> list[int]:
        found = set(User.objects.filter(pk__in=user_ids).values_list("pk", flat=True))
        return [user_id for user_id in user_ids if user_id not in found]

    # -------------------------------------------------------------------------
    # Memberships
    # -------------------------------------------------------------------------

    def add_membership(self, chat_id: int, user_id: int) -> Membership:
        # Savepoint so a duplicate does not poison an enclosing transaction
        with transaction.atomic():
            return Membership.objects.create(chat_id=chat_id, user_id=user_id)

    def is_member(self, chat_id: int, user_id: int) -> bool:
        return Membership.objects.filter(chat_id=chat_id, user_id=user_id).exists()

    def get_membership(self, chat_id: int, user_id: int) -> Membership | None:
        return Membership.objects.filter(chat_id=chat_id, user_id=user_id).first()

    def list_members(self, chat_id: int) -> list[User]:
        return list(
            User.objects.filter(chat_memberships__chat_id=chat_id).order_by(
                "chat_memberships__joined_at", "chat_memberships__id"
            )
        )

    def list_user_chats(self, user_id: int) -> list[Chat]:
        return list(Chat.objects.filter(memberships__user_id=user_id))

    def advance_last_read(self, chat_id: int, user_id: int, at: datetime) -> int:
        return (
            Membership.objects.filter(chat_id=chat_id, user_id=user_id)
            .filter(Q(last_read_at__isnull=True) | Q(last_read_at__lt=at))
            .update(last_read_at=at)
        )

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
        now = timezone.now()
        return Message.objects.create(
            chat_id=chat_id,
            sender_id=sender_id,
            content=content,
            message_type=message_type,
            created_at=now,
            updated_at=now,
        )

    def list_messages(self, chat_id: int, limit: int, offset: int) -> list[Message]:
        queryset = (
            Message.objects.filter(chat_id=chat_id)
            .select_related("sender")
            .order_by("-created_at", "-id")
        )
        return list(queryset[offset : offset + limit])

    def last_message(self, chat_id: int) -> Message | None:
        return (
            Message.objects.filter(chat_id=chat_id)
            .select_related("sender")
            .order_by("-created_at", "-id")
            .first()
        )

    def count_messages_after(self, chat_id: int, after: datetime) -> int:
        return Message.objects.filter(chat_id=chat_id, created_at__gt=after).count()
