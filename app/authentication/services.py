"""
Authentication services.

This module provides the AuthService class for account registration,
profile management and password changes.

Handles are not written here: registration delegates the first claim to
HandleReservationService so that every handle goes through the same
locking and uniqueness rules.

Related files:
    - models.py: User, Profile
    - signals.py: Profile auto-creation
    - handles/services.py: HandleReservationService

Security:
    - Passwords hashed with Django's PBKDF2
    - New passwords checked with Django's password validators
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from core.exceptions import ConflictError
from handles.exceptions import HandleTaken
from handles.services import HandleReservationService
from handles.validators import clean_handle

if TYPE_CHECKING:
    from authentication.models import Profile, User

logger = logging.getLogger(__name__)


class AuthService:
    """
    Centralized account business logic.

    Usage:
        from authentication.services import AuthService

        # Sign up with an explicit handle
        user = AuthService.register("a@example.com", "s3cret-pass", "Alice", "alice")

        # Sign up and let the service pick a handle
        user = AuthService.register("b@example.com", "s3cret-pass", "Bob")

        # Update the display name
        AuthService.update_profile(user, display_name="Bobby")
    """

    # Suggested handles tried at signup before giving up
    SIGNUP_SUGGESTION_ATTEMPTS = 3

    # Profile fields callers may change; the handle is not one of them
    EDITABLE_PROFILE_FIELDS = ("display_name",)

    @staticmethod
    def register(
        email: str,
        password: str,
        display_name: str = "",
        handle: str | None = None,
    ) -> User:
        """
        Create an account and claim its first handle.

        The user, its profile and the handle reservation are created in a
        single transaction: if the handle cannot be claimed, no account is
        left behind.

        Args:
            email: Login email
            password: Raw password
            display_name: Name shown to other users
            handle: Requested handle; a free one is suggested when omitted

        Returns:
            Created User instance

        Raises:
            ConflictError: EMAIL_EXISTS if the email is already registered
            InvalidHandleFormat: The requested handle breaks format rules;
                raised before any database access
            HandleTaken: The requested handle belongs to another account
        """
        from authentication.models import User

        email = email.lower().strip()
        display_name = (display_name or "").strip()
        if handle:
            handle = clean_handle(handle)

        try:
            with transaction.atomic():
                if User.objects.filter(email__iexact=email).exists():
                    raise ConflictError(
                        "A user with this email already exists.",
                        error_code="EMAIL_EXISTS",
                        details={"email": email},
                    )
                user = User.objects.create_user(email=email, password=password)
                profile = AuthService.get_or_create_profile(user)
                if display_name:
                    profile.display_name = display_name
                    profile.save(update_fields=["display_name", "updated_at"])

                if handle:
                    HandleReservationService.reserve_initial(user.pk, handle)
                else:
                    AuthService._claim_suggested_handle(user, display_name)
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email
            raise ConflictError(
                "A user with this email already exists.",
                error_code="EMAIL_EXISTS",
                details={"email": email},
            ) from None

        user.refresh_from_db()
        logger.info(
            f"User registered: {user.email}",
            extra={"user_id": str(user.pk), "handle": user.profile.handle},
        )
        return user

    @staticmethod
    def _claim_suggested_handle(user: User, display_name: str) -> Profile:
        last_error = None
        for _ in range(AuthService.SIGNUP_SUGGESTION_ATTEMPTS):
            candidate = HandleReservationService.suggest_handle(display_name)
            try:
                return HandleReservationService.reserve_initial(user.pk, candidate)
            except HandleTaken as e:
                last_error = e
        raise last_error

    @staticmethod
    def get_or_create_profile(user: User) -> Profile:
        """
        Get or create user profile.

        Args:
            user: User instance

        Returns:
            Profile instance for the user
        """
        from authentication.models import Profile

        profile, created = Profile.objects.get_or_create(user=user)
        if created:
            logger.debug(f"Profile created for user: {user.email}")
        return profile

    @staticmethod
    def update_profile(user: User, **data) -> Profile:
        """
        Update user profile data.

        Only EDITABLE_PROFILE_FIELDS are applied; anything else (including
        handle) is ignored. Handles change through HandleReservationService.

        Args:
            user: User instance
            **data: Profile fields to update

        Returns:
            Updated Profile instance
        """
        profile = AuthService.get_or_create_profile(user)

        changed = []
        for field, value in data.items():
            if field in AuthService.EDITABLE_PROFILE_FIELDS:
                setattr(profile, field, (value or "").strip())
                changed.append(field)

        if changed:
            profile.save(update_fields=[*changed, "updated_at"])
            logger.info(f"Profile updated for user: {user.email}")
        return profile

    @staticmethod
    def change_password(
        user: User, old_password: str, new_password: str
    ) -> tuple[bool, str]:
        """
        Change a user's password after checking the current one.

        Args:
            user: User instance
            old_password: Current password
            new_password: Replacement password

        Returns:
            Tuple of (success: bool, message: str)
        """
        if not user.check_password(old_password):
            return False, "Current password is incorrect"

        try:
            validate_password(new_password, user=user)
        except DjangoValidationError as e:
            return False, " ".join(e.messages)

        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])

        logger.info(f"Password changed for user: {user.email}")
        return True, "Password changed successfully"
