"""
Chat application configuration.

This app provides the chat system with:
- One-on-one and group chats
- Membership checks for sending and joining
- Message history ordered by recency
- Read tracking and unread counts
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
