"""
Serializers for the handles API.

Input serializers only check shape; handle format rules are enforced by
HandleReservationService so API and programmatic callers share one rule set.

Related files:
    - views.py: Views that use these serializers
    - services.py: HandleReservationService
"""

from rest_framework import serializers

from authentication.models import Profile
from handles.validators import HANDLE_MAX_LENGTH


class HandleInputSerializer(serializers.Serializer):
    """Candidate handle as typed by the user (may include a leading @)."""

    handle = serializers.CharField(
        max_length=HANDLE_MAX_LENGTH + 1,
        trim_whitespace=True,
        help_text="Handle to claim (3-20 chars, lowercase letters, digits, _)",
    )


class HandleChangeSerializer(HandleInputSerializer):
    """
    Request body for a handle change.

    old_handle is optional; the caller's current handle is released when it
    is omitted.
    """

    old_handle = serializers.CharField(
        max_length=HANDLE_MAX_LENGTH + 1,
        required=False,
        allow_blank=True,
    )


class HandleAvailabilitySerializer(serializers.Serializer):
    handle = serializers.CharField(read_only=True)
    available = serializers.BooleanField(read_only=True)


class HandleLookupSerializer(serializers.Serializer):
    handle = serializers.CharField(read_only=True)
    account_id = serializers.UUIDField(read_only=True)


class HandleSuggestionSerializer(serializers.Serializer):
    handle = serializers.CharField(read_only=True)


class PublicProfileSerializer(serializers.ModelSerializer):
    """
    Public view of an account, as returned by search and claim/change.

    Email is never exposed here.
    """

    account_id = serializers.UUIDField(source="user_id", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "account_id",
            "handle",
            "display_name",
            "handle_changed_at",
        ]
        read_only_fields = fields
