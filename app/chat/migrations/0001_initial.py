"""
Create the chat models.

Changes:
    - Create Chat with the name-only-for-groups check constraint
    - Create Membership with one row per (chat, user)
    - Create Message with a (chat, created_at, id) history index
    - Add Chat.members through Membership
"""

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Chat",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        blank=True,
                        help_text="Display name (group chats only)",
                        max_length=100,
                        null=True,
                    ),
                ),
                (
                    "is_group",
                    models.BooleanField(
                        default=False,
                        help_text="Group chats accept new members; one-on-one chats never do",
                    ),
                ),
                (
                    "avatar_url",
                    models.TextField(
                        blank=True,
                        help_text="Avatar reference (URL or storage key)",
                        null=True,
                    ),
                ),
                (
                    "last_message_at",
                    models.DateTimeField(
                        blank=True,
                        db_index=True,
                        help_text="Creation time of the most recent message",
                        null=True,
                    ),
                ),
            ],
            options={
                "db_table": "chat_chat",
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("is_group", True),
                            ("name__isnull", True),
                            _connector="OR",
                        ),
                        name="chat_name_only_for_groups",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Membership",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "joined_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="When the user joined the chat",
                    ),
                ),
                (
                    "last_read_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="Read watermark",
                        null=True,
                    ),
                ),
                (
                    "chat",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="memberships",
                        to="chat.chat",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="chat_memberships",
                        to="users.user",
                    ),
                ),
            ],
            options={
                "db_table": "chat_membership",
                "ordering": ["joined_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["user", "chat"],
                        name="chat_member_user_chat_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("chat", "user"),
                        name="unique_chat_membership",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "content",
                    models.TextField(help_text="Message text or attachment reference"),
                ),
                (
                    "message_type",
                    models.CharField(
                        choices=[("text", "Text"), ("image", "Image"), ("file", "File")],
                        default="text",
                        max_length=10,
                    ),
                ),
                (
                    "chat",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="chat.chat",
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_messages",
                        to="users.user",
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["chat", "created_at", "id"],
                        name="chat_msg_chat_created_idx",
                    ),
                ],
            },
        ),
        migrations.AddField(
            model_name="chat",
            name="members",
            field=models.ManyToManyField(
                related_name="chats",
                through="chat.Membership",
                to="users.user",
            ),
        ),
    ]
