"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures (alice, bob, carol)
- Chat fixtures (group and one-on-one) with memberships
- An in-memory store swapped in for the Django adapter
- API client

Usage:
    def test_example(group_chat, alice, api_client):
        response = api_client.get(f'/api/v1/chat/chats/{group_chat.id}/messages/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient

from chat.services import ChatBaseService
from chat.tests.factories import ChatFactory, GroupChatFactory, MembershipFactory
from chat.tests.fakes import InMemoryChatStore
from users.tests.factories import UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def alice(db):
    """First member of the test chats."""
    return UserFactory(username="alice", email="alice@example.com")


@pytest.fixture
def bob(db):
    """Second member of the test chats."""
    return UserFactory(username="bob", email="bob@example.com")


@pytest.fixture
def carol(db):
    """A user who is not a member of any test chat."""
    return UserFactory(username="carol", email="carol@example.com")


# =============================================================================
# Chat Fixtures
# =============================================================================


@pytest.fixture
def group_chat(db, alice, bob):
    """Group chat with alice and bob as members."""
    chat = GroupChatFactory(name="Team")
    MembershipFactory(chat=chat, user=alice)
    MembershipFactory(chat=chat, user=bob)
    return chat


@pytest.fixture
def direct_chat(db, alice, bob):
    """One-on-one chat between alice and bob."""
    chat = ChatFactory()
    MembershipFactory(chat=chat, user=alice)
    MembershipFactory(chat=chat, user=bob)
    return chat


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def memory_store(monkeypatch):
    """
    Run the chat services on an in-memory store.

    No database access is needed by tests that use only this fixture.
    """
    store = InMemoryChatStore()
    monkeypatch.setattr(ChatBaseService, "store", store)
    return store


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """API client; the chat API takes the acting user id in each request."""
    return APIClient()
