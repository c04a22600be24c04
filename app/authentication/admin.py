"""
Django admin configuration for authentication models.

This module registers User and Profile with the Django admin site.

Related files:
    - models.py: Model definitions
    - handles/admin.py: Handle reservations (read-only)
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import Profile, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for User model.

    Customized for email-based authentication. Public data (display name,
    handle) is shown via ProfileAdmin.
    """

    list_display = (
        "email",
        "email_verified",
        "is_active",
        "is_staff",
        "date_joined",
    )
    list_filter = (
        "is_active",
        "is_staff",
        "is_superuser",
        "email_verified",
    )
    search_fields = ("email", "profile__handle")
    ordering = ("-date_joined",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            "Status",
            {"fields": ("email_verified", "is_active", "is_staff", "is_superuser")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("date_joined", "last_login")},
        ),
    )

    # Fields for creating a new user
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )

    readonly_fields = ("date_joined", "last_login")


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Admin configuration for Profile model.

    The handle fields are read-only: editing them here would bypass the
    reservation table.
    """

    list_display = ("user", "handle", "display_name", "handle_changed_at")
    search_fields = ("user__email", "handle", "display_name")
    ordering = ("-created_at",)

    raw_id_fields = ("user",)
    readonly_fields = ("handle", "handle_changed_at", "created_at", "updated_at")

    fieldsets = (
        ("User", {"fields": ("user",)}),
        ("Identity", {"fields": ("display_name", "handle", "handle_changed_at")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )
