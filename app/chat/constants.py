"""
Constants and configuration for the chat module.

This module centralizes configuration values for:
- Chat attributes (name length)
- Message operations (types, history pagination bounds)

Pagination bounds can be overridden via Django settings
(CHAT_MESSAGES_DEFAULT_LIMIT, CHAT_MESSAGES_MAX_LIMIT).
Import example:
    from chat.constants import CHAT_CONFIG, MESSAGE_CONFIG
"""

from datetime import datetime, timezone
from typing import Final

from django.conf import settings


# =============================================================================
# Chat Configuration
# =============================================================================


class CHAT_CONFIG:
    """Configuration for chats."""

    NAME_MIN_LENGTH: Final[int] = 1
    NAME_MAX_LENGTH: Final[int] = 100

    # Creation needs at least one participant
    MIN_PARTICIPANTS: Final[int] = 1


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    DEFAULT_TYPE: Final[str] = "text"

    # History pagination
    DEFAULT_LIMIT: Final[int] = getattr(settings, "CHAT_MESSAGES_DEFAULT_LIMIT", 50)
    MIN_LIMIT: Final[int] = 1
    MAX_LIMIT: Final[int] = getattr(settings, "CHAT_MESSAGES_MAX_LIMIT", 100)


# =============================================================================
# Read Tracking
# =============================================================================

# Watermark used for members who have never read the chat
EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
