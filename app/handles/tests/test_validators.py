"""
Tests for handle normalization and format validation.

This module tests:
- normalize_handle: whitespace, leading @, case folding
- validate_handle: length, character set, underscore edges, reserved words
- clean_handle: the combined entry point

None of these touch the database.
"""

import pytest

from handles.exceptions import InvalidHandleFormat
from handles.validators import (
    HANDLE_MAX_LENGTH,
    HANDLE_MIN_LENGTH,
    RESERVED_HANDLES,
    clean_handle,
    normalize_handle,
    validate_handle,
)


# =============================================================================
# normalize_handle
# =============================================================================


class TestNormalizeHandle:
    """Tests for normalize_handle()."""

    def test_lowercases(self):
        """
        Mixed case collapses to lowercase.

        Why it matters: "Alice" and "alice" must be the same handle.
        """
        assert normalize_handle("Alice") == "alice"

    def test_strips_whitespace_and_leading_at(self):
        """
        Surrounding whitespace and one leading @ are removed.

        Why it matters: Users type "@alice " when they mean "alice".
        """
        assert normalize_handle("  @Alice ") == "alice"

    def test_strips_only_one_at(self):
        """A second @ is kept so validation can reject it."""
        assert normalize_handle("@@alice") == "@alice"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_input_returns_empty_string(self, raw):
        assert normalize_handle(raw) == ""

    def test_does_not_validate(self):
        """Normalization never raises, even for invalid handles."""
        assert normalize_handle("A!") == "a!"


# =============================================================================
# validate_handle
# =============================================================================


class TestValidateHandle:
    """Tests for validate_handle()."""

    @pytest.mark.parametrize(
        "handle",
        [
            "abc",
            "alice",
            "alice2",
            "jane_doe",
            "123user",
            "a" * HANDLE_MAX_LENGTH,
        ],
    )
    def test_valid_handles_are_returned_unchanged(self, handle):
        assert validate_handle(handle) == handle

    def test_empty_handle_is_rejected(self):
        with pytest.raises(InvalidHandleFormat) as exc_info:
            validate_handle("")

        assert exc_info.value.error_code == "INVALID_HANDLE_FORMAT"
        assert exc_info.value.message == "Handle is required."

    def test_too_short_is_rejected(self):
        """
        Handles shorter than the minimum are rejected.

        Why it matters: Two-letter handles are too easy to squat.
        """
        with pytest.raises(InvalidHandleFormat) as exc_info:
            validate_handle("a" * (HANDLE_MIN_LENGTH - 1))

        assert "at least" in exc_info.value.message

    def test_too_long_is_rejected(self):
        with pytest.raises(InvalidHandleFormat) as exc_info:
            validate_handle("a" * (HANDLE_MAX_LENGTH + 1))

        assert "or fewer" in exc_info.value.message

    @pytest.mark.parametrize(
        "handle",
        ["user name", "user-name", "user.name", "user@name", "Alice", "aliçe"],
    )
    def test_disallowed_characters_are_rejected(self, handle):
        """
        Anything outside lowercase letters, digits and underscore fails.

        Why it matters: Uppercase reaching the validator means the caller
        skipped normalization; it must not slip through.
        """
        with pytest.raises(InvalidHandleFormat):
            validate_handle(handle)

    def test_trailing_newline_is_rejected(self):
        """The whole string must match, not just a prefix."""
        with pytest.raises(InvalidHandleFormat):
            validate_handle("alice\n")

    @pytest.mark.parametrize("handle", ["_alice", "alice_", "___"])
    def test_underscore_edges_are_rejected(self, handle):
        with pytest.raises(InvalidHandleFormat) as exc_info:
            validate_handle(handle)

        assert "underscore" in exc_info.value.message

    @pytest.mark.parametrize("handle", sorted(RESERVED_HANDLES)[:5])
    def test_reserved_handles_are_rejected(self, handle):
        """
        Reserved words cannot be claimed.

        Why it matters: Prevents impersonation of staff and system accounts.
        """
        with pytest.raises(InvalidHandleFormat) as exc_info:
            validate_handle(handle)

        assert exc_info.value.error_code == "HANDLE_RESERVED"

    def test_error_details_carry_the_handle(self):
        with pytest.raises(InvalidHandleFormat) as exc_info:
            validate_handle("a!")

        assert exc_info.value.details == {"handle": "a!"}
        assert exc_info.value.http_status == 400


# =============================================================================
# clean_handle
# =============================================================================


class TestCleanHandle:
    """Tests for clean_handle()."""

    def test_normalizes_then_validates(self):
        assert clean_handle(" @Jane_Doe ") == "jane_doe"

    def test_reserved_check_applies_after_normalization(self):
        with pytest.raises(InvalidHandleFormat) as exc_info:
            clean_handle("@ADMIN")

        assert exc_info.value.error_code == "HANDLE_RESERVED"

    def test_none_is_rejected(self):
        with pytest.raises(InvalidHandleFormat):
            clean_handle(None)
