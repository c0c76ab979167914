"""
URL configuration for the users app.

URL structure:
    /api/v1/users/               - List users (GET), create user (POST)
    /api/v1/users/{id}/avatar/   - Update avatar (PATCH)
"""

from django.urls import path

from users.views import UserViewSet

app_name = "users"

urlpatterns = [
    path(
        "",
        UserViewSet.as_view({"get": "list", "post": "create"}),
        name="user-list",
    ),
    path(
        "<int:pk>/avatar/",
        UserViewSet.as_view({"patch": "avatar"}),
        name="user-avatar",
    ),
]
