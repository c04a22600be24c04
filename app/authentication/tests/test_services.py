"""
Tests for AuthService business logic.

This module tests:
- register: account creation with an explicit or suggested handle,
  all-or-nothing behavior when the handle cannot be claimed
- get_or_create_profile / update_profile: profile fields other than handle
- change_password: current password check and validators

Test Organization:
    - Each service method has its own test class
    - Each test validates ONE specific behavior

Dependencies:
    - pytest and pytest-django for test framework
    - Factory Boy fixtures from conftest.py
"""

from unittest.mock import patch

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

from authentication.models import Profile, User
from authentication.services import AuthService
from core.exceptions import ConflictError
from handles.exceptions import HandleTaken, InvalidHandleFormat
from handles.models import HandleReservation
from handles.services import HandleReservationService


# =============================================================================
# TestRegister
# =============================================================================


@pytest.mark.django_db
class TestRegister:
    """
    Tests for AuthService.register().

    Registration creates the user, its profile and the first handle
    reservation together.
    """

    def test_register_with_explicit_handle(self):
        """
        The requested handle is claimed for the new account.

        Why it matters: This is the primary signup path.
        """
        user = AuthService.register("new@example.com", "SecurePass123!", "New User", "NewUser")

        assert user.email == "new@example.com"
        assert user.check_password("SecurePass123!")
        assert user.profile.display_name == "New User"
        assert user.profile.handle == "newuser"
        assert user.profile.handle_changed_at is not None
        assert HandleReservation.objects.get(handle="newuser").account_id == user.pk

    def test_register_normalizes_email(self):
        user = AuthService.register("  MIXED@Example.COM ", "SecurePass123!", handle="mixed")

        assert user.email == "mixed@example.com"

    @patch("handles.services.secrets.randbelow", return_value=42)
    def test_register_without_handle_uses_suggestion(self, randbelow):
        user = AuthService.register("jane@example.com", "SecurePass123!", "Jane Doe")

        assert user.profile.handle == "janedoe_1042"

    def test_duplicate_email_raises_conflict(self, user):
        """
        Email uniqueness is reported as EMAIL_EXISTS, case-insensitively.

        Why it matters: Prevents a second account for the same person.
        """
        with pytest.raises(ConflictError) as exc_info:
            AuthService.register(user.email.upper(), "SecurePass123!", handle="another")

        assert exc_info.value.error_code == "EMAIL_EXISTS"
        assert not HandleReservation.objects.filter(handle="another").exists()

    def test_taken_handle_leaves_no_account(self, user_with_handle):
        """
        If the handle cannot be claimed, the user is not created either.

        Why it matters: A half-registered account without a handle would
        block the email from signing up again.
        """
        with pytest.raises(HandleTaken):
            AuthService.register("late@example.com", "SecurePass123!", handle="testuser")

        assert not User.objects.filter(email="late@example.com").exists()

    def test_invalid_handle_leaves_no_account(self):
        with pytest.raises(InvalidHandleFormat):
            AuthService.register("bad@example.com", "SecurePass123!", handle="a")

        assert not User.objects.filter(email="bad@example.com").exists()

    def test_invalid_handle_is_rejected_before_any_query(self):
        """
        A malformed handle fails before the database is touched.

        Why it matters: Bad input must not cost a password hash and a
        round of inserts that are then rolled back.
        """
        with CaptureQueriesContext(connection) as queries:
            with pytest.raises(InvalidHandleFormat):
                AuthService.register("x@example.com", "SecurePass123!", handle="_bad_")

        assert len(queries) == 0

    def test_taken_suggestion_is_retried(self, user):
        """A suggestion lost to a concurrent signup is replaced by another."""
        real_reserve = HandleReservationService.reserve_initial
        attempts = []

        def taken_once(account_id, handle):
            attempts.append(handle)
            if len(attempts) == 1:
                raise HandleTaken(handle)
            return real_reserve(account_id, handle)

        with patch.object(HandleReservationService, "reserve_initial", side_effect=taken_once):
            new_user = AuthService.register("retry@example.com", "SecurePass123!", "Retry")

        assert len(attempts) == 2
        assert new_user.profile.handle == attempts[1]

    def test_suggestions_exhausted_raise_handle_taken(self):
        with patch.object(
            HandleReservationService,
            "reserve_initial",
            side_effect=HandleTaken("taken"),
        ):
            with pytest.raises(HandleTaken):
                AuthService.register("unlucky@example.com", "SecurePass123!", "Unlucky")

        assert not User.objects.filter(email="unlucky@example.com").exists()


# =============================================================================
# TestProfileMethods
# =============================================================================


@pytest.mark.django_db
class TestGetOrCreateProfile:
    """Tests for AuthService.get_or_create_profile()."""

    def test_returns_existing_profile(self, user):
        profile = AuthService.get_or_create_profile(user)

        assert profile.pk == user.pk
        assert Profile.objects.filter(user=user).count() == 1

    def test_recreates_missing_profile(self, user):
        Profile.objects.filter(user=user).delete()

        profile = AuthService.get_or_create_profile(user)

        assert profile.user_id == user.pk


@pytest.mark.django_db
class TestUpdateProfile:
    """Tests for AuthService.update_profile()."""

    def test_updates_display_name(self, user):
        profile = AuthService.update_profile(user, display_name="  Renamed  ")

        assert profile.display_name == "Renamed"
        profile.refresh_from_db()
        assert profile.display_name == "Renamed"

    def test_ignores_handle(self, user_with_handle):
        """
        Handles cannot be changed through the generic profile update.

        Why it matters: Bypassing HandleReservationService would skip the
        uniqueness and cooldown checks.
        """
        profile = AuthService.update_profile(user_with_handle, handle="hijacked")

        profile.refresh_from_db()
        assert profile.handle == "testuser"


# =============================================================================
# TestChangePassword
# =============================================================================


@pytest.mark.django_db
class TestChangePassword:
    """Tests for AuthService.change_password()."""

    def test_changes_password(self, user):
        success, message = AuthService.change_password(
            user, "TestPass123!", "BrandNewPass456!"
        )

        assert success is True
        user.refresh_from_db()
        assert user.check_password("BrandNewPass456!")

    def test_wrong_current_password(self, user):
        success, message = AuthService.change_password(user, "wrong", "BrandNewPass456!")

        assert success is False
        assert message == "Current password is incorrect"

    def test_weak_new_password_rejected(self, user):
        success, message = AuthService.change_password(user, "TestPass123!", "12345678")

        assert success is False
        user.refresh_from_db()
        assert user.check_password("TestPass123!")
