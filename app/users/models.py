"""
User models.

This module defines the User model: the identity that owns chat
memberships and authors messages.

Related files:
    - services.py: UserService business logic
    - serializers.py: Input validation and output shapes

Design Decisions:
    - Handle (username) and e-mail address are unique and never change
    - Avatar is the only mutable field
    - Users are never deleted by the application
"""

from django.core.validators import MinLengthValidator
from django.db import models

from core.models import BaseModel

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50


class User(BaseModel):
    """
    A person who can take part in chats.

    Fields:
        username: Unique public handle (3-50 characters)
        email: Unique contact address
        avatar_url: Optional avatar reference (URL or storage key)

    Relationships:
        chat_memberships: Membership records (chat.Membership)
        chats: Chats the user belongs to (through Membership)
        sent_messages: Messages authored by the user
    """

    username = models.CharField(
        max_length=USERNAME_MAX_LENGTH,
        unique=True,
        validators=[MinLengthValidator(USERNAME_MIN_LENGTH)],
        help_text="Unique public handle",
    )

    email = models.EmailField(
        max_length=254,
        unique=True,
        help_text="Unique contact address",
    )

    avatar_url = models.TextField(
        null=True,
        blank=True,
        help_text="Avatar reference (URL or storage key)",
    )

    class Meta:
        db_table = "users_user"
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        """Return the user's handle as string representation."""
        return self.username
