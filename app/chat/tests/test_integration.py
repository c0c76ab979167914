"""
End-to-end chat journeys through the HTTP API.

Each test drives the public endpoints only, the way a client would.
"""

from rest_framework import status


USERS_URL = "/api/v1/users/"
CHATS_URL = "/api/v1/chat/chats/"


def create_user(client, username):
    response = client.post(
        USERS_URL,
        {"username": username, "email": f"{username}@example.com"},
        format="json",
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.data["id"]


class TestJoinThenSendJourney:
    """A non-member is locked out until they join a group chat."""

    def test_outsider_joins_group_and_message_reaches_members(self, db, api_client):
        """
        C cannot post to {A, B} until joining; after joining, A sees C's message.

        Why it matters: Membership is the only gate on posting, and joining
        opens it immediately.
        """
        a = create_user(api_client, "anna")
        b = create_user(api_client, "ben")
        c = create_user(api_client, "cleo")

        response = api_client.post(
            CHATS_URL,
            {"name": "AB", "is_group": True, "participant_ids": [a, b]},
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        chat_id = response.data["id"]
        messages_url = f"{CHATS_URL}{chat_id}/messages/"

        response = api_client.post(
            messages_url, {"sender_id": c, "content": "let me in"}, format="json"
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_A_MEMBER"

        response = api_client.post(
            f"{CHATS_URL}{chat_id}/join/", {"user_id": c}, format="json"
        )
        assert response.status_code == status.HTTP_201_CREATED

        response = api_client.post(
            messages_url, {"sender_id": c, "content": "hi all"}, format="json"
        )
        assert response.status_code == status.HTTP_201_CREATED
        message_id = response.data["id"]

        response = api_client.get(messages_url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]["id"] == message_id
        assert response.data[0]["sender"]["username"] == "cleo"

        response = api_client.get(f"/api/v1/chat/users/{a}/chats/")
        entry = response.data[0]
        assert {p["id"] for p in entry["participants"]} == {a, b, c}
        assert entry["last_message"]["id"] == message_id
        assert entry["unread_count"] == 1


class TestReadJourney:
    """Unread counts through the API."""

    def test_mark_read_clears_unread_count(self, db, api_client):
        """After marking read, the chat list shows no unread messages."""
        a = create_user(api_client, "anna")
        b = create_user(api_client, "ben")
        chat_id = api_client.post(
            CHATS_URL, {"participant_ids": [a, b]}, format="json"
        ).data["id"]

        api_client.post(
            f"{CHATS_URL}{chat_id}/messages/",
            {"sender_id": a, "content": "ping"},
            format="json",
        )
        assert api_client.get(f"/api/v1/chat/users/{b}/chats/").data[0][
            "unread_count"
        ] == 1

        response = api_client.post(
            f"{CHATS_URL}{chat_id}/read/", {"user_id": b}, format="json"
        )
        assert response.status_code == status.HTTP_204_NO_CONTENT

        assert api_client.get(f"/api/v1/chat/users/{b}/chats/").data[0][
            "unread_count"
        ] == 0

    def test_direct_chat_cannot_be_joined(self, db, api_client):
        """One-on-one chats refuse joins even from outsiders."""
        a = create_user(api_client, "anna")
        b = create_user(api_client, "ben")
        c = create_user(api_client, "cleo")
        chat_id = api_client.post(
            CHATS_URL, {"participant_ids": [a, b]}, format="json"
        ).data["id"]

        response = api_client.post(
            f"{CHATS_URL}{chat_id}/join/", {"user_id": c}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "NOT_A_GROUP_CHAT"
