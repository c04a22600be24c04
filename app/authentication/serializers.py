"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (read operations)
- Profile model (read/update of fields other than the handle)
- Registration and password change input

Related files:
    - models.py: User and Profile models
    - views.py: Views that use these serializers
    - services.py: AuthService

Security:
    - Password fields are write-only
    - Handle fields are read-only; handles change via /api/v1/handles/
"""

from rest_framework import serializers

from authentication.models import Profile, User
from handles.validators import HANDLE_MAX_LENGTH


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Includes profile data for convenience.
    """

    display_name = serializers.CharField(source="profile.display_name", read_only=True)
    handle = serializers.CharField(source="profile.handle", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "display_name",
            "handle",
            "email_verified",
            "date_joined",
        ]
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    """
    Serializer for Profile model (read operations).

    Provides complete profile data for the account owner.
    """

    account_id = serializers.UUIDField(source="user_id", read_only=True)
    user_email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "account_id",
            "user_email",
            "display_name",
            "handle",
            "handle_changed_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    """Serializer for updating profile fields other than the handle."""

    display_name = serializers.CharField(max_length=150, allow_blank=True)


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for user registration.

    The handle is optional; when omitted, one is suggested from the display
    name. Handle format is checked by HandleReservationService.
    """

    email = serializers.EmailField(required=True)
    password1 = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
        help_text="Password must be at least 8 characters.",
    )
    password2 = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Confirm your password.",
    )
    display_name = serializers.CharField(
        max_length=150, required=False, allow_blank=True, default=""
    )
    handle = serializers.CharField(
        max_length=HANDLE_MAX_LENGTH + 1,
        required=False,
        allow_blank=True,
        help_text="Requested handle (optional)",
    )

    def validate_email(self, value):
        """Normalize email; uniqueness is enforced by AuthService.register()."""
        return value.lower().strip()

    def validate(self, attrs):
        """Validate that passwords match."""
        if attrs["password1"] != attrs["password2"]:
            raise serializers.ValidationError({"password2": "Passwords do not match."})
        return attrs


class PasswordChangeSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=8)
