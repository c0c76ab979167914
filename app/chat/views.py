"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ChatViewSet: Chat creation, joining, messages and read tracking
- UserChatsView: A user's activity-ordered chat list

URL Structure:
    /api/v1/chat/chats/                       POST
    /api/v1/chat/chats/{id}/join/             POST
    /api/v1/chat/chats/{id}/messages/         GET, POST
    /api/v1/chat/chats/{id}/read/             POST
    /api/v1/chat/users/{user_id}/chats/       GET

Design Decisions:
    - There is no session; the acting user id is part of every request
    - All operations use the service layer for business logic
    - Service error codes map to HTTP statuses in error_status_map
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.views import ServiceResponseMixin
from chat.serializers import (
    ChatCreateSerializer,
    ChatSerializer,
    ChatSummarySerializer,
    MembershipSerializer,
    MessageCreateSerializer,
    MessageListQuerySerializer,
    MessageSerializer,
    MessageWithSenderSerializer,
    UserIdSerializer,
)
from chat.services import (
    ChatListService,
    ChatService,
    MessageService,
    ReadTrackingService,
)


class ChatErrorStatusMixin(ServiceResponseMixin):
    """HTTP statuses for chat error codes."""

    error_status_map = {
        **ServiceResponseMixin.error_status_map,
        "CHAT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "NOT_A_MEMBER": status.HTTP_403_FORBIDDEN,
        "ALREADY_MEMBER": status.HTTP_409_CONFLICT,
        "NOT_A_GROUP_CHAT": status.HTTP_409_CONFLICT,
        "UNKNOWN_PARTICIPANT": status.HTTP_400_BAD_REQUEST,
    }


class ChatViewSet(ChatErrorStatusMixin, viewsets.ViewSet):
    """
    ViewSet for chats.

    create: Create a chat with its initial members
    join: Add a user to a group chat
    messages: GET history (newest first), POST a message as a member
    read: Mark the chat read for a user
    """

    permission_classes = [AllowAny]
    serializer_class = ChatSerializer
    lookup_value_regex = r"\d+"

    @extend_schema(
        operation_id="create_chat",
        summary="Create chat",
        request=ChatCreateSerializer,
        responses={
            201: ChatSerializer,
            400: OpenApiResponse(description="Invalid input or unknown participants"),
        },
        tags=["Chat"],
    )
    def create(self, request):
        """Create a chat (one-on-one or group)."""
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        result = ChatService.create_chat(
            participant_ids=data["participant_ids"],
            is_group=data["is_group"],
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
        )

        if not result.success:
            return self.failure_response(result)

        return Response(ChatSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="join_chat",
        summary="Join group chat",
        request=UserIdSerializer,
        responses={
            201: MembershipSerializer,
            404: OpenApiResponse(description="Chat or user not found"),
            409: OpenApiResponse(description="Not a group chat, or already a member"),
        },
        tags=["Chat"],
    )
    @action(detail=True, methods=["post"])
    def join(self, request, pk=None):
        """Add a user to a group chat."""
        serializer = UserIdSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ChatService.join_chat(
            chat_id=int(pk),
            user_id=serializer.validated_data["user_id"],
        )

        if not result.success:
            return self.failure_response(result)

        return Response(
            MembershipSerializer(result.data).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(
        methods=["GET"],
        operation_id="list_chat_messages",
        summary="Get chat messages",
        parameters=[
            OpenApiParameter("limit", OpenApiTypes.INT, OpenApiParameter.QUERY),
            OpenApiParameter("offset", OpenApiTypes.INT, OpenApiParameter.QUERY),
        ],
        responses={200: MessageWithSenderSerializer(many=True)},
        tags=["Chat"],
    )
    @extend_schema(
        methods=["POST"],
        operation_id="send_message",
        summary="Send message",
        request=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            403: OpenApiResponse(description="Sender is not a member of the chat"),
        },
        tags=["Chat"],
    )
    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        """
        Get or send messages.

        GET /api/v1/chat/chats/{id}/messages/?limit=&offset=
        POST /api/v1/chat/chats/{id}/messages/
        """
        if request.method == "POST":
            return self._send_message(request, int(pk))

        query = MessageListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = MessageService.get_chat_messages(
            chat_id=int(pk),
            limit=query.validated_data["limit"],
            offset=query.validated_data["offset"],
        )

        if not result.success:
            return self.failure_response(result)

        return Response(MessageWithSenderSerializer(result.data, many=True).data)

    def _send_message(self, request, chat_id):
        """Send a message as a member of the chat."""
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        result = MessageService.send_message(
            chat_id=chat_id,
            sender_id=data["sender_id"],
            content=data["content"],
            message_type=data["message_type"],
        )

        if not result.success:
            return self.failure_response(result)

        return Response(MessageSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="mark_chat_read",
        summary="Mark chat as read",
        request=UserIdSerializer,
        responses={204: None},
        tags=["Chat"],
    )
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        """Move the user's read watermark to now."""
        serializer = UserIdSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ReadTrackingService.mark_read(
            chat_id=int(pk),
            user_id=serializer.validated_data["user_id"],
        )

        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    operation_id="list_user_chats",
    summary="List a user's chats",
    description=(
        "Chats the user belongs to, most recently active first, with "
        "participants, last message and the user's unread count."
    ),
    responses={200: ChatSummarySerializer(many=True)},
    tags=["Chat"],
)
class UserChatsView(APIView):
    """
    API view for a user's chat list.

    GET: Chat summaries ordered by activity

    URL: /api/v1/chat/users/{user_id}/chats/
    """

    permission_classes = [AllowAny]

    def get(self, request, user_id):
        summaries = ChatListService.get_user_chats(user_id)
        return Response(ChatSummarySerializer(summaries, many=True).data)
