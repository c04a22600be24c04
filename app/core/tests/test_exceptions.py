"""
Tests for the application exception hierarchy.

Covers the response payload, status codes and retryability flags that
views and the transactional boundary rely on.
"""

import pytest

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    RateLimitError,
    StorageUnavailable,
    TransactionConflict,
    ValidationError,
)
from handles.exceptions import CooldownActive, HandleTaken, InvalidHandleFormat


class TestBaseApplicationError:
    """Tests for BaseApplicationError."""

    def test_defaults(self):
        error = BaseApplicationError("Something failed")

        assert error.message == "Something failed"
        assert error.error_code == "APPLICATION_ERROR"
        assert error.details == {}
        assert error.is_retryable is False

    def test_to_dict_omits_empty_details(self):
        error = NotFoundError("Account missing", error_code="ACCOUNT_NOT_FOUND")

        assert error.to_dict() == {
            "error": "Account missing",
            "error_code": "ACCOUNT_NOT_FOUND",
        }

    def test_to_dict_includes_details(self):
        error = ConflictError("Duplicate", details={"field": "email"})

        assert error.to_dict()["details"] == {"field": "email"}

    def test_str_includes_code(self):
        assert str(ValidationError("Bad input")) == "[VALIDATION_ERROR] Bad input"

    def test_repr_names_class(self):
        assert repr(RateLimitError("Slow down")).startswith("RateLimitError(")


class TestStatusAndRetryability:
    """
    Each error class declares the HTTP status views respond with.

    Why it matters: Clients distinguish "pick another handle" (409) from
    "wait" (429) from "retry later" (503) by status alone.
    """

    @pytest.mark.parametrize(
        "error_class, status, retryable",
        [
            (ValidationError, 400, False),
            (NotFoundError, 404, False),
            (ConflictError, 409, False),
            (RateLimitError, 429, False),
            (ExternalServiceError, 503, False),
            (TransactionConflict, 503, True),
            (StorageUnavailable, 503, True),
        ],
    )
    def test_class_attributes(self, error_class, status, retryable):
        error = error_class("message")

        assert error.http_status == status
        assert error.is_retryable is retryable

    def test_transient_errors_stay_in_their_families(self):
        assert issubclass(TransactionConflict, ConflictError)
        assert issubclass(StorageUnavailable, ExternalServiceError)


class TestHandleErrors:
    """Tests for handle-specific exceptions."""

    def test_handle_taken(self):
        error = HandleTaken("alice")

        assert error.http_status == 409
        assert error.to_dict() == {
            "error": "This handle is already taken.",
            "error_code": "HANDLE_TAKEN",
            "details": {"handle": "alice"},
        }

    @pytest.mark.parametrize(
        "days, message",
        [
            (1, "You can change your handle again in 1 day."),
            (7, "You can change your handle again in 7 days."),
        ],
    )
    def test_cooldown_active_message(self, days, message):
        error = CooldownActive(days)

        assert error.days_remaining == days
        assert error.message == message
        assert error.http_status == 429

    def test_invalid_format_custom_code(self):
        error = InvalidHandleFormat("Reserved.", "admin", error_code="HANDLE_RESERVED")

        assert error.error_code == "HANDLE_RESERVED"
        assert error.handle == "admin"
        assert isinstance(error, ValidationError)
