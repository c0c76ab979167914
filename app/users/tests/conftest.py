"""
Test configuration and fixtures for users tests.

Usage:
    def test_example(user, api_client):
        response = api_client.get('/api/v1/users/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient

from users.tests.factories import UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic user."""
    return UserFactory()


@pytest.fixture
def alice(db):
    """Create a user with a known handle and address."""
    return UserFactory(username="alice", email="alice@example.com")


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client (the API has no authentication layer)."""
    return APIClient()
