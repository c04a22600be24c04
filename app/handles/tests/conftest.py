"""
Test configuration and fixtures for handle tests.

Two accounts, u1 and u2, are available in most tests; ``u1_with_alice``
has already claimed "alice" at a fixed point in time (CLAIM_TIME) so
cooldown boundaries can be computed exactly with freezegun.
"""

from datetime import datetime, timezone as dt_timezone

import pytest
from freezegun import freeze_time
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from handles.services import HandleReservationService

CLAIM_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def u1(db):
    return UserFactory(email="u1@example.com", display_name="User One")


@pytest.fixture
def u2(db):
    return UserFactory(email="u2@example.com", display_name="User Two")


@pytest.fixture
def u1_with_alice(u1):
    """u1 holding "alice", claimed at CLAIM_TIME."""
    with freeze_time(CLAIM_TIME):
        HandleReservationService.reserve_initial(u1.pk, "alice")
    u1.profile.refresh_from_db()
    return u1


@pytest.fixture
def client_for(db):
    """
    Factory returning a JWT-authenticated client for a user.

    Usage:
        client = client_for(u1)
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client
