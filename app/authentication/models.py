"""
Authentication models.

This module defines the account models:
- User: Custom user model with email-based authentication (slim, auth-focused)
- Profile: Public account data, including the current handle (OneToOne with User)

The account identifier used throughout the handle registry is ``User.id``
(a UUID). Profile shares that primary key.

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AuthService business logic
    - signals.py: Auto-create profile on user creation
    - handles/services.py: The only writer of Profile.handle

Security:
    - User passwords hashed with Django's PBKDF2
"""

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager
from core.models import BaseModel, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the login identifier.

    This is a slim user model focused on authentication only.
    Public data (display name, handle) is stored in the Profile model.

    Fields:
        id: Opaque UUID, the account identifier
        email: Login identifier, unique
        email_verified: Whether the user's email has been verified
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword'
        )
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (login identifier)",
    )
    email_verified = models.BooleanField(
        default=False,
        help_text="Whether the user's email has been verified",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        """Return the user's email as string representation."""
        return self.email

    def get_full_name(self):
        """Return the display name from profile, or email if unset."""
        try:
            return self.profile.display_name or self.email
        except Profile.DoesNotExist:
            return self.email

    def get_short_name(self):
        """Return the handle from profile, or the email local part."""
        try:
            return self.profile.handle or self.email.split("@")[0]
        except Profile.DoesNotExist:
            return self.email.split("@")[0]

    @property
    def has_handle(self):
        """Check if the account has claimed a handle."""
        try:
            return bool(self.profile.handle)
        except Profile.DoesNotExist:
            return False


class Profile(BaseModel):
    """
    Public account data.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        display_name: Free-form name shown in chats, not unique
        handle: Current handle, mirrors the account's HandleReservation
        handle_changed_at: When the handle was last claimed or changed

    Note:
        handle and handle_changed_at are written only by
        HandleReservationService, inside the same transaction that writes
        the reservation records. Never assign them directly.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        help_text="User this profile belongs to",
    )
    display_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="Name shown to other users (not unique)",
    )
    handle = models.CharField(
        max_length=20,
        null=True,
        blank=True,
        unique=True,
        help_text="Current handle (3-20 chars, a-z, 0-9, underscore)",
    )
    handle_changed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the handle was last claimed or changed (cooldown anchor)",
    )

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"

    def __str__(self):
        """Return handle or user email."""
        return self.handle or str(self.user)

    @property
    def account_id(self):
        """The account identifier (same as the user's primary key)."""
        return self.user_id
