"""
Serializers for chat API.

This module provides serializers for the chat system:
- Chat serializers (read, create, list summary)
- Membership serializer (read)
- Message serializers (read, read with sender, create, history query)

Serializer Hierarchy:
    ChatSerializer: Chat fields
    ChatCreateSerializer: Chat creation input
    ChatSummarySerializer: Chat list entry (chat fields, participants,
        last message, unread count)

    MembershipSerializer: Membership with read watermark
    UserIdSerializer: Acting user for join / mark-read

    MessageSerializer: Message fields
    MessageWithSenderSerializer: Message plus the sender's public profile
    MessageCreateSerializer: Send new message
    MessageListQuerySerializer: limit/offset for history

Design Decisions:
    - Read and write serializers are separate for clarity
    - Malformed input is rejected here; the services re-check the rules
      they own and report domain error codes
"""

from __future__ import annotations

from rest_framework import serializers

from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
from chat.models import Chat, Membership, Message, MessageType
from users.serializers import UserPublicSerializer, UserSerializer


# =============================================================================
# Message Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """Read serializer for messages."""

    chat_id = serializers.IntegerField(read_only=True)
    sender_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "chat_id",
            "sender_id",
            "content",
            "message_type",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MessageWithSenderSerializer(MessageSerializer):
    """Message joined with its sender's public profile."""

    sender = UserPublicSerializer(read_only=True)

    class Meta(MessageSerializer.Meta):
        fields = MessageSerializer.Meta.fields + ["sender"]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """
    Serializer for sending messages.

    For image and file messages the content is an opaque reference
    (URL or storage key).
    """

    sender_id = serializers.IntegerField(
        help_text="Acting user (must be a member of the chat)",
    )
    # Stored exactly as sent; blank content is rejected by MessageService
    content = serializers.CharField(
        trim_whitespace=False,
        help_text="Message text, or an attachment reference",
    )
    message_type = serializers.ChoiceField(
        choices=MessageType.choices,
        default=MessageType.TEXT,
        help_text="text, image or file",
    )


class MessageListQuerySerializer(serializers.Serializer):
    """Query parameters for message history."""

    limit = serializers.IntegerField(
        min_value=MESSAGE_CONFIG.MIN_LIMIT,
        max_value=MESSAGE_CONFIG.MAX_LIMIT,
        default=MESSAGE_CONFIG.DEFAULT_LIMIT,
    )
    offset = serializers.IntegerField(min_value=0, default=0)


# =============================================================================
# Membership Serializers
# =============================================================================


class MembershipSerializer(serializers.ModelSerializer):
    """Read serializer for memberships."""

    chat_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Membership
        fields = ["id", "chat_id", "user_id", "joined_at", "last_read_at"]
        read_only_fields = fields


class UserIdSerializer(serializers.Serializer):
    """Acting user for join and mark-read."""

    user_id = serializers.IntegerField()


# =============================================================================
# Chat Serializers
# =============================================================================


class ChatSerializer(serializers.ModelSerializer):
    """Read serializer for chats."""

    class Meta:
        model = Chat
        fields = [
            "id",
            "name",
            "is_group",
            "avatar_url",
            "last_message_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ChatCreateSerializer(serializers.Serializer):
    """
    Serializer for creating chats.

    Only group chats may have a name. Whether the participant ids exist is
    checked by ChatService so unknown ids come back as UNKNOWN_PARTICIPANT.
    """

    name = serializers.CharField(
        min_length=CHAT_CONFIG.NAME_MIN_LENGTH,
        max_length=CHAT_CONFIG.NAME_MAX_LENGTH,
        required=False,
        allow_null=True,
        default=None,
        help_text="Display name (group chats only)",
    )
    is_group = serializers.BooleanField(default=False)
    avatar_url = serializers.CharField(
        required=False,
        allow_null=True,
        default=None,
    )
    participant_ids = serializers.ListField(
        child=serializers.IntegerField(),
        min_length=CHAT_CONFIG.MIN_PARTICIPANTS,
        help_text="Initial members",
    )

    def validate(self, attrs: dict) -> dict:
        """Reject a name on one-on-one chats."""
        if attrs.get("name") is not None and not attrs["is_group"]:
            raise serializers.ValidationError(
                {"name": "Only group chats can have a name"}
            )
        return attrs


class ChatSummarySerializer(serializers.Serializer):
    """
    One entry of a user's chat list.

    Serializes chat.services.ChatSummary: the chat's own fields at the top
    level, plus participants, last message and unread count.
    """

    id = serializers.IntegerField(source="chat.id")
    name = serializers.CharField(source="chat.name", allow_null=True)
    is_group = serializers.BooleanField(source="chat.is_group")
    avatar_url = serializers.CharField(source="chat.avatar_url", allow_null=True)
    last_message_at = serializers.DateTimeField(
        source="chat.last_message_at", allow_null=True
    )
    created_at = serializers.DateTimeField(source="chat.created_at")
    updated_at = serializers.DateTimeField(source="chat.updated_at")
    participants = UserSerializer(many=True)
    last_message = MessageWithSenderSerializer(allow_null=True)
    unread_count = serializers.IntegerField()
