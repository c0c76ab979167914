"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat management (with membership inline)
- Message moderation
"""

from django.contrib import admin

from chat.models import Chat, Membership, Message


class MembershipInline(admin.TabularInline):
    """Inline display of memberships in chat admin."""

    model = Membership
    extra = 0
    readonly_fields = ["joined_at", "last_read_at"]
    raw_id_fields = ["user"]


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    """Admin interface for Chat model."""

    list_display = [
        "id",
        "name",
        "is_group",
        "created_at",
        "last_message_at",
    ]
    list_filter = ["is_group", "created_at"]
    search_fields = ["name", "id"]
    readonly_fields = ["created_at", "updated_at", "last_message_at"]
    inlines = [MembershipInline]
    ordering = ["-created_at"]

    def get_readonly_fields(self, request, obj=None):
        """The group flag is fixed once the chat exists."""
        if obj is not None:
            return ["is_group", *self.readonly_fields]
        return self.readonly_fields


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = ["id", "chat", "sender", "message_type", "created_at"]
    list_filter = ["message_type", "created_at"]
    search_fields = ["content"]
    raw_id_fields = ["chat", "sender"]
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["-created_at"]
