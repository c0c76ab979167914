"""
Users views.

This module provides API views for the user directory:
- Create a user
- List users
- Update a user's avatar

URL Structure:
    /api/v1/users/                  GET, POST
    /api/v1/users/{id}/avatar/      PATCH

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (UserService)
    - urls.py: URL routing

Note:
    There is no authentication layer; every endpoint is open and the
    acting user is passed explicitly by the chat endpoints.
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.views import ServiceResponseMixin
from users.serializers import (
    AvatarUpdateSerializer,
    UserCreateSerializer,
    UserSerializer,
)
from users.services import UserService


class UserViewSet(ServiceResponseMixin, viewsets.ViewSet):
    """
    ViewSet for the user directory.

    list: All users in creation order
    create: Register a user (unique handle and address)
    avatar: Set or clear the avatar of an existing user
    """

    permission_classes = [AllowAny]
    serializer_class = UserSerializer

    error_status_map = {
        **ServiceResponseMixin.error_status_map,
        "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "DUPLICATE_HANDLE": status.HTTP_409_CONFLICT,
        "DUPLICATE_ADDRESS": status.HTTP_409_CONFLICT,
    }

    @extend_schema(
        operation_id="list_users",
        summary="List users",
        responses={200: UserSerializer(many=True)},
        tags=["Users"],
    )
    def list(self, request):
        """Return every user, oldest first."""
        users = UserService.list_users()
        return Response(UserSerializer(users, many=True).data)

    @extend_schema(
        operation_id="create_user",
        summary="Create user",
        request=UserCreateSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(description="Invalid input"),
            409: OpenApiResponse(description="Username or email already exists"),
        },
        tags=["Users"],
    )
    def create(self, request):
        """Create a user."""
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        result = UserService.create_user(
            username=data["username"],
            email=data["email"],
            avatar_url=data.get("avatar_url"),
        )

        if not result.success:
            return self.failure_response(result)

        return Response(UserSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="update_user_avatar",
        summary="Update avatar",
        request=AvatarUpdateSerializer,
        responses={
            200: UserSerializer,
            404: OpenApiResponse(description="User not found"),
        },
        tags=["Users"],
    )
    def avatar(self, request, pk=None):
        """Set or clear the user's avatar."""
        serializer = AvatarUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = UserService.update_avatar(
            user_id=int(pk),
            avatar_url=serializer.validated_data["avatar_url"],
        )

        if not result.success:
            return self.failure_response(result)

        return Response(UserSerializer(result.data).data)
