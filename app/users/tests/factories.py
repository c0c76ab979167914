"""
Factory Boy factories for users models.

Usage:
    from users.tests.factories import UserFactory

    # Create a user with default values
    user = UserFactory()

    # Create a user with a known handle
    user = UserFactory(username="alice")
"""

import factory

from users.models import User


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Handles and addresses are sequenced so every user is unique.

    Examples:
        user = UserFactory()
        user = UserFactory(avatar_url="https://cdn.example.com/a.png")
    """

    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user{n:03d}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    avatar_url = None
