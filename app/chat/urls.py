"""
URL configuration for chat API.

URL Structure:
    Chats:
        /chats/                          POST
        /chats/{id}/join/                POST
        /chats/{id}/read/                POST

    Messages:
        /chats/{id}/messages/            GET, POST

    Chat list:
        /users/{user_id}/chats/          GET

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import ChatViewSet, UserChatsView

# Chat creation plus the join, read and messages actions
router = DefaultRouter()
router.register(r"chats", ChatViewSet, basename="chat")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
    path(
        "users/<int:user_id>/chats/",
        UserChatsView.as_view(),
        name="user-chats",
    ),
]
