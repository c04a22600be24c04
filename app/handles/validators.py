"""
Handle normalization and format validation.

Rules for a valid handle:
    - 3 to 20 characters
    - lowercase letters, digits and underscores only
    - no leading or trailing underscore
    - not a reserved word

Validation never touches the database, so format errors are always raised
before any storage access.
"""

from __future__ import annotations

import re

from handles.exceptions import InvalidHandleFormat

HANDLE_MIN_LENGTH = 3
HANDLE_MAX_LENGTH = 20

HANDLE_PATTERN = re.compile(r"[a-z0-9_]+")

# Handles that cannot be claimed by anyone
RESERVED_HANDLES = frozenset([
    "admin", "administrator", "root", "system", "api", "www",
    "mail", "email", "support", "help", "info", "contact",
    "about", "terms", "privacy", "security", "account", "login",
    "logout", "register", "signup", "signin", "signout", "auth",
    "authentication", "user", "users", "profile", "profiles",
    "settings", "config", "configuration", "dashboard", "home",
    "index", "null", "undefined", "anonymous", "guest",
    "official", "verified", "staff", "mod", "moderator",
    "bot", "robot", "service", "notification", "chat", "chats",
])


def normalize_handle(raw: str | None) -> str:
    """
    Return the canonical form of a user-typed handle.

    Strips surrounding whitespace and one leading "@", then lowercases.
    Does not validate.

    Example:
        normalize_handle("  @Alice ")  # "alice"
    """
    if not raw:
        return ""
    value = raw.strip()
    if value.startswith("@"):
        value = value[1:]
    return value.lower()


def validate_handle(handle: str) -> str:
    """
    Check a normalized handle against the format rules.

    Args:
        handle: Already-normalized handle

    Returns:
        The handle, unchanged

    Raises:
        InvalidHandleFormat: On the first rule the handle breaks
    """
    if not handle:
        raise InvalidHandleFormat("Handle is required.", handle)
    if len(handle) < HANDLE_MIN_LENGTH:
        raise InvalidHandleFormat(
            f"Must be at least {HANDLE_MIN_LENGTH} characters.", handle
        )
    if len(handle) > HANDLE_MAX_LENGTH:
        raise InvalidHandleFormat(
            f"Must be {HANDLE_MAX_LENGTH} characters or fewer.", handle
        )
    if not HANDLE_PATTERN.fullmatch(handle):
        raise InvalidHandleFormat(
            "Only lowercase letters, numbers and underscores.", handle
        )
    if handle.startswith("_") or handle.endswith("_"):
        raise InvalidHandleFormat("Cannot start or end with underscore.", handle)
    if handle in RESERVED_HANDLES:
        raise InvalidHandleFormat(
            f"The handle '{handle}' is reserved and cannot be used.",
            handle,
            error_code="HANDLE_RESERVED",
        )
    return handle


def clean_handle(raw: str | None) -> str:
    """Normalize then validate; the usual entry point for user input."""
    return validate_handle(normalize_handle(raw))
