"""
Membership checks for chat operations.

The guard decides whether a user may act on a chat. It is consulted first
by every chat-scoped write or read, and raises chat.exceptions errors that
the calling service turns into a ServiceResult.

Key Components:
    MembershipGuard: Checks against a ChatStore

Error Codes:
    NOT_A_MEMBER: User is not a member (also used when the chat does not exist)
    CHAT_NOT_FOUND: Chat does not exist (group checks only)
    NOT_A_GROUP_CHAT: Chat is one-on-one

Usage:
    guard = MembershipGuard(store)

    if guard.is_member(chat_id, user_id):
        # proceed with operation

    guard.require_membership(chat_id, user_id)  # raises NotAMemberError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chat.exceptions import ChatNotFoundError, NotAGroupChatError, NotAMemberError

if TYPE_CHECKING:
    from chat.models import Chat
    from chat.protocols import ChatStore


class MembershipGuard:
    """
    Stateless membership checks bound to a store.

    Results are not cached; every call reads the store.
    """

    def __init__(self, store: ChatStore):
        self.store = store

    def is_member(self, chat_id: int, user_id: int) -> bool:
        """
        Check if the user belongs to the chat.

        Returns False for a chat that does not exist.
        """
        return self.store.is_member(chat_id, user_id)

    def require_membership(self, chat_id: int, user_id: int) -> None:
        """
        Require that the user belongs to the chat.

        A missing chat has no members, so it is reported the same way as
        a missing membership.

        Raises:
            NotAMemberError: User is not a member, or the chat does not exist
        """
        if not self.is_member(chat_id, user_id):
            raise NotAMemberError(details={"chat_id": chat_id, "user_id": user_id})

    def require_group_chat(self, chat_id: int) -> Chat:
        """
        Require that the chat exists and is a group chat.

        Returns:
            The chat

        Raises:
            ChatNotFoundError: Chat does not exist
            NotAGroupChatError: Chat is one-on-one
        """
        chat = self.store.get_chat(chat_id)
        if chat is None:
            raise ChatNotFoundError(details={"chat_id": chat_id})
        if not chat.is_group:
            raise NotAGroupChatError(details={"chat_id": chat_id})
        return chat
