"""
Chat app: membership and message visibility.

This app handles:
- Chats (one-on-one and group) and their memberships
- Message sending and paginated history
- Read watermarks and unread counts
- Activity-ordered chat lists per user

Related apps:
    - users: User model for members and senders

Storage:
    Services depend on the ChatStore protocol (protocols.py), implemented
    on the Django ORM by DjangoChatStore (repositories.py).

Usage:
    from chat.services import ChatService, MessageService

    # Create a group chat
    result = ChatService.create_chat(
        participant_ids=[alice.id, bob.id],
        is_group=True,
        name="Team",
    )

    # Send message
    result = MessageService.send_message(
        chat_id=result.data.id,
        sender_id=alice.id,
        content="Hello!",
    )
"""
