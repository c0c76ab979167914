"""
Tests for chat API views.

This module tests the chat endpoints:
- POST /api/v1/chat/chats/
- POST /api/v1/chat/chats/{id}/join/
- GET/POST /api/v1/chat/chats/{id}/messages/
- POST /api/v1/chat/chats/{id}/read/
- GET /api/v1/chat/users/{user_id}/chats/

Testing Philosophy:
    Tests focus on observable HTTP behavior: status codes, response bodies
    and database state. Business rules are covered in test_services.py.
"""

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from chat.models import Chat, Membership, Message
from chat.tests.factories import MessageFactory


# =============================================================================
# URL Constants
# =============================================================================


CHATS_URL = "/api/v1/chat/chats/"


def join_url(chat_id):
    return f"/api/v1/chat/chats/{chat_id}/join/"


def messages_url(chat_id):
    return f"/api/v1/chat/chats/{chat_id}/messages/"


def read_url(chat_id):
    return f"/api/v1/chat/chats/{chat_id}/read/"


def user_chats_url(user_id):
    return f"/api/v1/chat/users/{user_id}/chats/"


# =============================================================================
# TestChatCreate
# =============================================================================


class TestChatCreate:
    """Tests for POST /api/v1/chat/chats/."""

    def test_post_creates_group_chat(self, db, api_client, alice, bob):
        """
        Valid payload returns 201 with the chat.

        Why it matters: Primary happy path for starting a conversation.
        """
        response = api_client.post(
            CHATS_URL,
            {"name": "Team", "is_group": True, "participant_ids": [alice.id, bob.id]},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["name"] == "Team"
        assert response.data["is_group"] is True
        assert response.data["last_message_at"] is None
        assert Membership.objects.filter(chat_id=response.data["id"]).count() == 2

    def test_post_empty_participants_returns_400(self, db, api_client):
        """An empty participant list is rejected."""
        response = api_client.post(
            CHATS_URL, {"participant_ids": []}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "participant_ids" in response.data

    def test_post_name_on_direct_chat_returns_400(self, db, api_client, alice, bob):
        """One-on-one chats cannot be named."""
        response = api_client.post(
            CHATS_URL,
            {"name": "Nope", "is_group": False, "participant_ids": [alice.id, bob.id]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "name" in response.data

    def test_post_unknown_participant_returns_400_with_missing_ids(
        self, db, api_client, alice
    ):
        """
        Unknown ids return UNKNOWN_PARTICIPANT and no chat is created.

        Why it matters: Clients learn exactly which ids failed.
        """
        response = api_client.post(
            CHATS_URL,
            {"is_group": True, "participant_ids": [alice.id, 999999]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "UNKNOWN_PARTICIPANT"
        assert response.data["errors"] == {"missing_ids": [999999]}
        assert Chat.objects.count() == 0


# =============================================================================
# TestChatJoin
# =============================================================================


class TestChatJoin:
    """Tests for POST /api/v1/chat/chats/{id}/join/."""

    def test_post_joins_group_chat(self, db, api_client, group_chat, carol):
        """Joining a group chat returns 201 with the membership."""
        response = api_client.post(
            join_url(group_chat.id), {"user_id": carol.id}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["user_id"] == carol.id
        assert response.data["chat_id"] == group_chat.id
        assert response.data["last_read_at"] is None

    def test_post_direct_chat_returns_409(self, db, api_client, direct_chat, carol):
        """One-on-one chats return 409 NOT_A_GROUP_CHAT."""
        response = api_client.post(
            join_url(direct_chat.id), {"user_id": carol.id}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "NOT_A_GROUP_CHAT"

    def test_post_existing_member_returns_409(self, db, api_client, group_chat, alice):
        """Existing members return 409 ALREADY_MEMBER."""
        response = api_client.post(
            join_url(group_chat.id), {"user_id": alice.id}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "ALREADY_MEMBER"

    def test_post_missing_chat_returns_404(self, db, api_client, carol):
        """Missing chats return 404 CHAT_NOT_FOUND."""
        response = api_client.post(
            join_url(999999), {"user_id": carol.id}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "CHAT_NOT_FOUND"

    def test_post_missing_user_returns_404(self, db, api_client, group_chat):
        """Unknown users return 404 USER_NOT_FOUND."""
        response = api_client.post(
            join_url(group_chat.id), {"user_id": 999999}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "USER_NOT_FOUND"


# =============================================================================
# TestMessages
# =============================================================================


class TestMessagesSend:
    """Tests for POST /api/v1/chat/chats/{id}/messages/."""

    def test_post_member_sends_message(self, db, api_client, group_chat, alice):
        """
        Members get 201 and the message; type defaults to text.

        Why it matters: Primary happy path of messaging.
        """
        response = api_client.post(
            messages_url(group_chat.id),
            {"sender_id": alice.id, "content": "Hello"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["content"] == "Hello"
        assert response.data["message_type"] == "text"
        assert response.data["sender_id"] == alice.id
        assert response.data["created_at"] == response.data["updated_at"]

    def test_post_non_member_returns_403(self, db, api_client, group_chat, carol):
        """Non-members get 403 NOT_A_MEMBER and nothing is stored."""
        response = api_client.post(
            messages_url(group_chat.id),
            {"sender_id": carol.id, "content": "Hello"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_A_MEMBER"
        assert Message.objects.count() == 0

    def test_post_stores_content_verbatim(self, db, api_client, group_chat, alice):
        """
        Indentation and trailing newlines survive the round trip.

        Why it matters: Code snippets and references are stored as sent.
        """
        body = "    def f():\n        return 1\n"

        response = api_client.post(
            messages_url(group_chat.id),
            {"sender_id": alice.id, "content": body},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["content"] == body
        assert Message.objects.get(pk=response.data["id"]).content == body

    def test_post_blank_content_returns_400(self, db, api_client, group_chat, alice):
        """Whitespace-only content is rejected."""
        response = api_client.post(
            messages_url(group_chat.id),
            {"sender_id": alice.id, "content": "   "},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_post_invalid_type_returns_400(self, db, api_client, group_chat, alice):
        """Unknown message types are rejected."""
        response = api_client.post(
            messages_url(group_chat.id),
            {"sender_id": alice.id, "content": "x", "message_type": "video"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "message_type" in response.data


class TestMessagesList:
    """Tests for GET /api/v1/chat/chats/{id}/messages/."""

    def test_get_returns_messages_with_sender(self, db, api_client, group_chat, alice):
        """
        Messages come back newest first with the sender's public profile.

        Why it matters: Clients render handle and avatar per message.
        """
        start = timezone.now()
        MessageFactory(chat=group_chat, sender=alice, content="old", created_at=start)
        MessageFactory(
            chat=group_chat,
            sender=alice,
            content="new",
            created_at=start + timedelta(seconds=1),
        )

        response = api_client.get(messages_url(group_chat.id))

        assert response.status_code == status.HTTP_200_OK
        assert [m["content"] for m in response.data] == ["new", "old"]
        assert response.data[0]["sender"] == {
            "id": alice.id,
            "username": "alice",
            "avatar_url": None,
        }

    def test_get_respects_limit_and_offset(self, db, api_client, group_chat, alice):
        """limit and offset page through the history."""
        start = timezone.now()
        for i in range(5):
            MessageFactory(
                chat=group_chat,
                sender=alice,
                content=f"m{i}",
                created_at=start + timedelta(seconds=i),
            )

        response = api_client.get(messages_url(group_chat.id), {"limit": 3, "offset": 2})

        assert [m["content"] for m in response.data] == ["m2", "m1", "m0"]

    def test_get_limit_above_max_returns_400(self, db, api_client, group_chat):
        """limit is capped at 100."""
        response = api_client.get(messages_url(group_chat.id), {"limit": 101})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "limit" in response.data

    def test_get_missing_chat_returns_empty_list(self, db, api_client):
        """A chat that does not exist yields 200 and an empty list."""
        response = api_client.get(messages_url(999999))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []


# =============================================================================
# TestChatRead
# =============================================================================


class TestChatRead:
    """Tests for POST /api/v1/chat/chats/{id}/read/."""

    def test_post_sets_watermark(self, db, api_client, group_chat, bob):
        """Marking read returns 204 and sets the watermark."""
        response = api_client.post(
            read_url(group_chat.id), {"user_id": bob.id}, format="json"
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Membership.objects.get(chat=group_chat, user=bob).last_read_at is not None

    def test_post_non_member_returns_204(self, db, api_client, group_chat, carol):
        """
        Non-members also get 204 and nothing changes.

        Why it matters: Marking read has no failure mode.
        """
        response = api_client.post(
            read_url(group_chat.id), {"user_id": carol.id}, format="json"
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Membership.objects.filter(user=carol).exists()

    def test_post_missing_user_id_returns_400(self, db, api_client, group_chat):
        """The acting user id is required."""
        response = api_client.post(read_url(group_chat.id), {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# TestUserChats
# =============================================================================


class TestUserChats:
    """Tests for GET /api/v1/chat/users/{user_id}/chats/."""

    def test_get_returns_summaries(self, db, api_client, group_chat, alice, bob):
        """
        Each entry has chat fields, participants, last message and unread count.

        Why it matters: This is the chat list screen's single request.
        """
        message = MessageFactory(chat=group_chat, sender=alice, content="hi")

        response = api_client.get(user_chats_url(bob.id))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        entry = response.data[0]
        assert entry["id"] == group_chat.id
        assert entry["name"] == "Team"
        assert entry["is_group"] is True
        assert {p["username"] for p in entry["participants"]} == {"alice", "bob"}
        assert entry["last_message"]["id"] == message.id
        assert entry["last_message"]["sender"]["username"] == "alice"
        assert entry["unread_count"] == 1

    def test_get_chat_without_messages_has_null_last_message(
        self, db, api_client, group_chat, alice
    ):
        """Chats without messages are still listed."""
        response = api_client.get(user_chats_url(alice.id))

        assert response.data[0]["last_message"] is None
        assert response.data[0]["unread_count"] == 0

    def test_get_unknown_user_returns_empty_list(self, db, api_client):
        """Unknown users have no chats."""
        response = api_client.get(user_chats_url(999999))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []


# =============================================================================
# TestRouting
# =============================================================================


class TestRouting:
    """Tests for the router-generated chat URLs."""

    def test_action_routes_reverse_to_expected_paths(self):
        """
        The router names the create route and each detail action.

        Why it matters: Clients and other views reverse these names.
        """
        assert reverse("chat:chat-list") == CHATS_URL
        assert reverse("chat:chat-join", args=[7]) == join_url(7)
        assert reverse("chat:chat-read", args=[7]) == read_url(7)
        assert reverse("chat:chat-messages", args=[7]) == messages_url(7)

    def test_non_numeric_chat_id_returns_404(self, db, api_client):
        """Chat ids in the path must be integers."""
        response = api_client.get("/api/v1/chat/chats/abc/messages/")

        assert response.status_code == status.HTTP_404_NOT_FOUND
