"""
Handle-specific exceptions.

Exception Hierarchy:
    ValidationError
    └── InvalidHandleFormat - Handle fails format rules (raised before any I/O)
    ConflictError
    └── HandleTaken - Handle is reserved by another account
    RateLimitError
    └── CooldownActive - Handle changed too recently

All three are expected, user-facing outcomes. Callers should surface the
message as-is; CooldownActive carries the integer days remaining.

Usage:
    from handles.exceptions import CooldownActive, HandleTaken

    try:
        HandleReservationService.reserve_change(account_id, "alice2")
    except CooldownActive as e:
        show(f"Try again in {e.days_remaining} days")
    except HandleTaken:
        show("Pick another handle")
"""

from __future__ import annotations

from core.exceptions import ConflictError, RateLimitError, ValidationError


class InvalidHandleFormat(ValidationError):
    """
    Raised when a candidate handle breaks a format rule.

    error_code is INVALID_HANDLE_FORMAT, or HANDLE_RESERVED for reserved words.
    """

    default_error_code: str = "INVALID_HANDLE_FORMAT"

    def __init__(self, message: str, handle: str = "", error_code: str | None = None):
        self.handle = handle
        super().__init__(message, error_code=error_code, details={"handle": handle})


class HandleTaken(ConflictError):
    """Raised when the handle is reserved by a different account."""

    default_error_code: str = "HANDLE_TAKEN"

    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(
            "This handle is already taken.",
            details={"handle": handle},
        )


class CooldownActive(RateLimitError):
    """
    Raised when the account changed its handle too recently.

    Attributes:
        days_remaining: Whole days (rounded up) until a change is allowed
    """

    default_error_code: str = "HANDLE_COOLDOWN_ACTIVE"

    def __init__(self, days_remaining: int):
        self.days_remaining = days_remaining
        unit = "day" if days_remaining == 1 else "days"
        super().__init__(
            f"You can change your handle again in {days_remaining} {unit}.",
            details={"days_remaining": days_remaining},
        )
