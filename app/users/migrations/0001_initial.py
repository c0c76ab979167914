"""
Create the User model.

Changes:
    - Create User with unique username and email and an optional avatar
"""

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="User",
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
                    "username",
                    models.CharField(
                        help_text="Unique public handle",
                        max_length=50,
                        unique=True,
                        validators=[django.core.validators.MinLengthValidator(3)],
                    ),
                ),
                (
                    "email",
                    models.EmailField(
                        help_text="Unique contact address",
                        max_length=254,
                        unique=True,
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
            ],
            options={
                "db_table": "users_user",
                "ordering": ["created_at", "id"],
            },
        ),
    ]
