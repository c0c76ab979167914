"""
Users app: the directory of people who can take part in chats.

This app handles:
- User records (unique handle, unique e-mail address, optional avatar)
- Creating and listing users
- Updating the avatar (the only mutable field)

There is no authentication layer: callers pass an explicit user id to the
chat operations, and this app only answers "who exists".

Related apps:
    - chat: Memberships and messages reference users

Usage:
    from users.services import UserService

    result = UserService.create_user(
        username="alice",
        email="alice@example.com",
    )
"""
