"""
Test configuration and fixtures for authentication tests.

This module provides:
- Reusable fixtures for common test scenarios
- API client helpers for authenticated requests
- Test data fixtures

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/auth/profile/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import User
from authentication.tests.factories import UserFactory
from handles.services import HandleReservationService


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """
    Create a basic verified user with auto-created profile.

    The profile is automatically created via signals but has no handle set.
    """
    return UserFactory(email_verified=True, display_name="Test User")


@pytest.fixture
def user_with_handle(db):
    """Create a user who has claimed the handle "testuser"."""
    user = UserFactory(email_verified=True, display_name="Test User")
    HandleReservationService.reserve_initial(user.pk, "testuser")
    user.profile.refresh_from_db()
    return user


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )


@pytest.fixture
def deactivated_user(db):
    """Create a deactivated user (is_active=False)."""
    return UserFactory(is_active=False)


@pytest.fixture
def profile(user):
    """Get the profile for the default user fixture."""
    return user.profile


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def authenticated_client(user):
    """
    API client authenticated with JWT token for the default user fixture.

    Use this for tests that need a logged-in user.
    """
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get('/api/v1/auth/profile/')
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def valid_registration_data():
    """Valid data for user registration endpoint."""
    return {
        "email": "newuser@example.com",
        "password1": "SecurePass123!",
        "password2": "SecurePass123!",
        "display_name": "New User",
        "handle": "newuser",
    }
