"""
Serializers for the users app.

This module provides DRF serializers for:
- User model (read operations, also nested as chat participant / sender)
- User creation input
- Avatar update input

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
    - services.py: UserService performs the uniqueness checks

Note:
    Input serializers are plain Serializers rather than ModelSerializers so
    uniqueness is decided by UserService (409 with a domain error code)
    instead of DRF's UniqueValidator (400).
"""

from rest_framework import serializers

from users.models import USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH, User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Used for the user directory and for participant lists in chat
    summaries.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "avatar_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserPublicSerializer(serializers.ModelSerializer):
    """Public profile of a user (handle and avatar), used for message senders."""

    class Meta:
        model = User
        fields = ["id", "username", "avatar_url"]
        read_only_fields = fields


class UserCreateSerializer(serializers.Serializer):
    """
    Validate user creation input.

    Fields:
        username: 3-50 characters
        email: Valid e-mail address
        avatar_url: Optional avatar reference
    """

    username = serializers.CharField(
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
    )
    email = serializers.EmailField(max_length=254)
    avatar_url = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=False,
    )


class AvatarUpdateSerializer(serializers.Serializer):
    """Validate avatar updates. Null clears the avatar."""

    avatar_url = serializers.CharField(allow_null=True, allow_blank=False)
