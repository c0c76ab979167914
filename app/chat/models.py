"""
Chat system models.

This module defines the data models for the chat system supporting:
- One-on-one chats with a membership set fixed at creation
- Group chats that users may join

Models:
    Chat: Container for messages between members
    Membership: A user's membership in a chat, with a read watermark
    Message: Individual message within a chat

Design Decisions:
    - The group flag is fixed at creation; only group chats accept joins
    - Only group chats may carry a name (enforced by a check constraint)
    - last_message_at changes only when a message is appended
    - At most one membership per (chat, user)
    - Message created_at and updated_at are the same instant on insert
"""

from __future__ import annotations

from django.db import models
from django.db.models import Q
from django.utils import timezone

from core.models import BaseModel

from chat.constants import CHAT_CONFIG


class MessageType(models.TextChoices):
    """
    Type of message content.

    TEXT: User-authored text
    IMAGE: Opaque image reference (URL or storage key)
    FILE: Opaque file reference (URL or storage key)
    """

    TEXT = "text", "Text"
    IMAGE = "image", "Image"
    FILE = "file", "File"


class Chat(BaseModel):
    """
    A conversation container, one-on-one or group.

    Fields:
        name: Display name (group chats only, optional)
        is_group: Whether members may join after creation
        avatar_url: Optional avatar reference
        last_message_at: Creation time of the newest message (activity timestamp)

    Relationships:
        memberships: Membership records
        members: Users in the chat (through Membership)
        messages: Messages in the chat
    """

    name = models.CharField(
        max_length=CHAT_CONFIG.NAME_MAX_LENGTH,
        null=True,
        blank=True,
        help_text="Display name (group chats only)",
    )

    is_group = models.BooleanField(
        default=False,
        help_text="Group chats accept new members; one-on-one chats never do",
    )

    avatar_url = models.TextField(
        null=True,
        blank=True,
        help_text="Avatar reference (URL or storage key)",
    )

    last_message_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Creation time of the most recent message",
    )

    members = models.ManyToManyField(
        "users.User",
        through="Membership",
        related_name="chats",
    )

    class Meta:
        db_table = "chat_chat"
        ordering = ["-created_at", "-id"]
        constraints = [
            # Only group chats can be named
            models.CheckConstraint(
                condition=Q(is_group=True) | Q(name__isnull=True),
                name="chat_name_only_for_groups",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        if not self.is_group:
            return f"Direct({self.pk})"
        if self.name:
            return f"Group: {self.name}"
        return f"Group({self.pk})"


class Membership(models.Model):
    """
    A user's membership in a chat.

    Fields:
        chat: The chat
        user: The member
        joined_at: When the membership was created
        last_read_at: Read watermark; messages created after it are unread.
            Null until the member first marks the chat read, and never
            moves backwards.
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="memberships",
    )

    user = models.ForeignKey(
        "users.User",
        on_delete=models.CASCADE,
        related_name="chat_memberships",
    )

    joined_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the user joined the chat",
    )

    last_read_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Read watermark",
    )

    class Meta:
        db_table = "chat_membership"
        ordering = ["joined_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["chat", "user"],
                name="unique_chat_membership",
            ),
        ]
        indexes = [
            # User's chats
            models.Index(
                fields=["user", "chat"],
                name="chat_member_user_chat_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"Membership(chat={self.chat_id}, user={self.user_id})"


class Message(BaseModel):
    """
    Individual message within a chat.

    Fields:
        chat: Chat the message belongs to
        sender: Author; a member of the chat at send time
        content: Text, or an opaque reference for image/file messages
        message_type: text, image or file
        created_at: Defines ordering (ties broken by id)
        updated_at: Equal to created_at on insert; reserved for edits
    """

    # Set explicitly so both timestamps share one instant
    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        help_text="Timestamp when this record was created",
    )
    updated_at = models.DateTimeField(
        default=timezone.now,
        help_text="Timestamp when this record was last modified",
    )

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="messages",
    )

    sender = models.ForeignKey(
        "users.User",
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )

    content = models.TextField(
        help_text="Message text or attachment reference",
    )

    message_type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.TEXT,
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["-created_at", "-id"]
        indexes = [
            # Message history in a chat, newest first
            models.Index(
                fields=["chat", "created_at", "id"],
                name="chat_msg_chat_created_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"Message({self.pk}) in Chat({self.chat_id})"
