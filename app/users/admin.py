"""
Django admin configuration for the users app.

Related files:
    - models.py: Model definitions
"""

from django.contrib import admin

from users.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """
    Admin configuration for User model.

    Handle and address are fixed after creation; only the avatar is editable.
    """

    list_display = ("username", "email", "created_at")
    search_fields = ("username", "email")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (None, {"fields": ("username", "email", "avatar_url")}),
        ("Important dates", {"fields": ("created_at", "updated_at")}),
    )

    def get_readonly_fields(self, request, obj=None):
        """Lock username and email once the user exists."""
        if obj is not None:
            return ("username", "email", *self.readonly_fields)
        return self.readonly_fields
