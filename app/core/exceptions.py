"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- A single place where storage failures are classified as retryable

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures
    ├── NotFoundError - Resource not found
    ├── ConflictError - State conflicts (duplicates, concurrent modifications)
    │   └── TransactionConflict - Lost a race inside a transaction (retryable)
    ├── RateLimitError - Action not allowed yet
    └── ExternalServiceError - Backing service failures
        └── StorageUnavailable - Database unreachable or timed out (retryable)

Usage:
    from core.exceptions import ConflictError, NotFoundError

    raise NotFoundError(
        f"Account {account_id} not found",
        error_code="ACCOUNT_NOT_FOUND",
        details={"account_id": str(account_id)},
    )

    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=400)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        is_retryable: Whether repeating the same call may succeed
        http_status: Status code views respond with

    Example:
        try:
            HandleReservationService.reserve_initial(account_id, "alice")
        except BaseApplicationError as e:
            logger.warning(f"Reservation refused: {e.error_code}")
            return Response(e.to_dict(), status=409)
    """

    default_error_code: str = "APPLICATION_ERROR"
    is_retryable: bool = False
    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "This handle is already taken.",
                "error_code": "HANDLE_TAKEN",
                "details": {"handle": "alice"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for service-layer validation that must run before any I/O.
    For DRF serializer validation, use DRF's built-in validation.
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        profile = Profile.objects.filter(pk=account_id).first()
        if not profile:
            raise NotFoundError(
                f"Account {account_id} not found",
                error_code="ACCOUNT_NOT_FOUND",
            )
    """

    default_error_code: str = "NOT_FOUND"
    http_status: int = 404


class ConflictError(BaseApplicationError):
    """
    Raised when operation conflicts with current resource state.

    Use for:
    - Duplicate entries (unique constraint violations)
    - Concurrent modification conflicts

    Note:
        HTTP 409 Conflict is the appropriate status for these errors.
    """

    default_error_code: str = "CONFLICT"
    http_status: int = 409


class RateLimitError(BaseApplicationError):
    """
    Raised when an action is not allowed yet.

    Note:
        Include the remaining wait in details when possible to help clients.
        HTTP 429 Too Many Requests is the appropriate status.
    """

    default_error_code: str = "RATE_LIMIT_EXCEEDED"
    http_status: int = 429


class ExternalServiceError(BaseApplicationError):
    """
    Raised when a backing service call fails.

    Note:
        Log the original error for debugging but don't expose
        internal details to clients in production.
        HTTP 503 Service Unavailable is appropriate.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    http_status: int = 503


class TransactionConflict(ConflictError):
    """
    Raised when a transaction lost a race against a concurrent writer.

    Covers unique-key collisions on insert, serialization failures and
    deadlocks. Nothing was committed; repeating the call is safe.
    """

    default_error_code: str = "TRANSACTION_CONFLICT"
    is_retryable: bool = True
    http_status: int = 503


class StorageUnavailable(ExternalServiceError):
    """
    Raised when the database is unreachable or an attempt timed out.

    Nothing was committed; repeating the call with backoff is safe.
    """

    default_error_code: str = "STORAGE_UNAVAILABLE"
    is_retryable: bool = True
