"""
Handle reservation services.

This module provides HandleReservationService, the single owner of
HandleReservation rows and of Profile.handle / Profile.handle_changed_at.

Every write runs as one unit through core.transactions: the account's
profile row is locked, the target reservation is read, and the release of
the old handle, the claim of the new one and the timestamp update commit
together or not at all. Two callers racing for the same handle can never
both win: the loser either sees the winner's reservation after the lock is
released, or collides on the reservation primary key and is retried into
HandleTaken.

Related files:
    - models.py: HandleReservation
    - validators.py: normalize_handle / validate_handle
    - exceptions.py: HandleTaken, CooldownActive, InvalidHandleFormat
    - core/transactions.py: Retrying transactional boundary
"""

from __future__ import annotations

import math
import re
import secrets
from datetime import timedelta
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from core.exceptions import ConflictError, NotFoundError
from core.services import BaseService
from handles.exceptions import CooldownActive, HandleTaken
from handles.models import HandleReservation
from handles.validators import clean_handle, normalize_handle

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from uuid import UUID

    from authentication.models import Profile

DEFAULT_COOLDOWN_DAYS = 7
SUGGESTION_BASE_LENGTH = 14
MIN_SEARCH_LENGTH = 2


def cooldown_days_remaining(
    changed_at: datetime | None,
    now: datetime,
    cooldown: timedelta,
) -> int:
    """
    Whole days (rounded up) until ``changed_at + cooldown``; 0 once elapsed.

    Example:
        # changed 6 days 23:59:59 ago with a 7 day cooldown
        cooldown_days_remaining(changed_at, now, timedelta(days=7))  # 1
    """
    if changed_at is None:
        return 0
    remaining = changed_at + cooldown - now
    if remaining <= timedelta(0):
        return 0
    return math.ceil(remaining / timedelta(days=1))


def _lock_account(account_id: UUID | str) -> Profile:
    """Load and row-lock the account's profile for the current transaction."""
    from authentication.models import Profile

    try:
        return Profile.objects.select_for_update().get(pk=account_id)
    except (Profile.DoesNotExist, DjangoValidationError, ValueError):
        raise NotFoundError(
            f"Account {account_id} not found",
            error_code="ACCOUNT_NOT_FOUND",
            details={"account_id": str(account_id)},
        ) from None


def _read_reservation(handle: str) -> HandleReservation | None:
    return HandleReservation.objects.select_for_update().filter(handle=handle).first()


def _release_reservations(profile: Profile, handles: Iterable[str]) -> int:
    """Delete the given reservations, but only those this account owns."""
    handles = [h for h in handles if h]
    if not handles:
        return 0
    deleted, _ = HandleReservation.objects.filter(
        handle__in=handles, account_id=profile.user_id
    ).delete()
    return deleted


def _claim_reservation(
    profile: Profile,
    handle: str,
    now: datetime,
    existing: HandleReservation | None,
) -> None:
    """Write the reservation and mirror it onto the profile."""
    if existing is None:
        HandleReservation.objects.create(
            handle=handle, account_id=profile.user_id, reserved_at=now
        )
    profile.handle = handle
    profile.handle_changed_at = now
    profile.save(update_fields=["handle", "handle_changed_at", "updated_at"])


class HandleReservationService(BaseService):
    """
    Globally unique handles with a cooldown between changes.

    All methods are classmethods; the service holds no state between calls
    and is safe to call from any number of threads or processes.

    Usage:
        from handles.services import HandleReservationService

        # On signup
        HandleReservationService.reserve_initial(user.id, "Alice")

        # Later, at most once per cooldown period
        HandleReservationService.reserve_change(user.id, "alice2")

        HandleReservationService.is_available("alice", user.id)  # True
        HandleReservationService.lookup_account_by_handle("@ALICE2")  # user.id
    """

    @staticmethod
    def cooldown_period() -> timedelta:
        """Minimum time between two handle changes by one account."""
        days = getattr(settings, "HANDLE_CHANGE_COOLDOWN_DAYS", DEFAULT_COOLDOWN_DAYS)
        return timedelta(days=days)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @classmethod
    def reserve_initial(cls, account_id: UUID | str, handle: str) -> Profile:
        """
        Claim a first handle for an account (no cooldown check).

        The claim also stamps handle_changed_at, so the cooldown for a
        subsequent change starts at signup. An account that already holds a
        different handle is refused; moving goes through reserve_change().
        Claiming the handle the account already holds changes nothing.

        Args:
            account_id: Owning account (User.id)
            handle: Candidate handle; normalized and validated here

        Returns:
            The updated Profile

        Raises:
            InvalidHandleFormat: Before any storage access
            HandleTaken: Another account owns the handle
            ConflictError: The account already holds a different handle
                (HANDLE_ALREADY_CLAIMED)
            NotFoundError: Unknown account
            TransactionConflict / StorageUnavailable: Transient, retry later
        """
        handle = clean_handle(handle)
        profile = cls.run_atomic(cls._reserve_initial_unit, account_id, handle)

        cls.get_logger().info(
            f"Handle @{handle} reserved for account {account_id}",
            extra={"account_id": str(account_id), "handle": handle},
        )
        return profile

    @classmethod
    def _reserve_initial_unit(cls, account_id: UUID | str, handle: str) -> Profile:
        profile = _lock_account(account_id)
        if profile.handle and profile.handle != handle:
            raise ConflictError(
                "This account already has a handle. Use a handle change instead.",
                error_code="HANDLE_ALREADY_CLAIMED",
                details={"handle": profile.handle},
            )

        existing = _read_reservation(handle)
        if existing is not None and existing.account_id != profile.user_id:
            raise HandleTaken(handle)
        if existing is not None and profile.handle == handle:
            return profile

        _claim_reservation(profile, handle, timezone.now(), existing)
        return profile

    @classmethod
    def reserve_change(
        cls,
        account_id: UUID | str,
        new_handle: str,
        old_handle: str | None = None,
    ) -> Profile:
        """
        Move an account to a new handle, enforcing the cooldown.

        In one unit: refuse if another account owns ``new_handle``; refuse
        if the last change is within the cooldown period; release the old
        handle; reserve the new one; stamp handle_changed_at.

        Args:
            account_id: Owning account (User.id)
            new_handle: Candidate handle; normalized and validated here
            old_handle: Handle to release (defaults to the account's current
                handle). Only released if this account owns it.

        Returns:
            The updated Profile

        Raises:
            InvalidHandleFormat: Before any storage access
            HandleTaken: Another account owns new_handle
            CooldownActive: Changed too recently (carries days_remaining)
            NotFoundError: Unknown account
            TransactionConflict / StorageUnavailable: Transient, retry later
        """
        new_handle = clean_handle(new_handle)
        old_handle = normalize_handle(old_handle) or None
        profile = cls.run_atomic(
            cls._reserve_change_unit, account_id, new_handle, old_handle
        )

        cls.get_logger().info(
            f"Handle changed to @{new_handle} for account {account_id}",
            extra={
                "account_id": str(account_id),
                "handle": new_handle,
                "old_handle": old_handle,
            },
        )
        return profile

    @classmethod
    def _reserve_change_unit(
        cls,
        account_id: UUID | str,
        new_handle: str,
        old_handle: str | None,
    ) -> Profile:
        profile = _lock_account(account_id)
        existing = _read_reservation(new_handle)
        if existing is not None and existing.account_id != profile.user_id:
            raise HandleTaken(new_handle)

        now = timezone.now()
        days_remaining = cooldown_days_remaining(
            profile.handle_changed_at, now, cls.cooldown_period()
        )
        if days_remaining > 0:
            raise CooldownActive(days_remaining)

        released = {old_handle, profile.handle} - {None, new_handle}
        _release_reservations(profile, released)
        _claim_reservation(profile, new_handle, now, existing)
        return profile

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @classmethod
    def is_available(cls, handle: str, account_id: UUID | str | None = None) -> bool:
        """
        Check whether ``handle`` could be claimed by ``account_id``.

        True if nobody holds the handle or ``account_id`` already does.
        Advisory only: reserve_initial()/reserve_change() give the binding
        answer.

        Raises:
            InvalidHandleFormat: The handle can never be claimed
        """
        handle = clean_handle(handle)
        owner = (
            HandleReservation.objects.filter(handle=handle)
            .values_list("account_id", flat=True)
            .first()
        )
        if owner is None:
            return True
        return account_id is not None and str(owner) == str(account_id)

    @classmethod
    def lookup_account_by_handle(cls, handle: str) -> UUID | None:
        """Return the account owning ``handle`` (case-insensitive), or None."""
        handle = normalize_handle(handle)
        if not handle:
            return None
        return (
            HandleReservation.objects.filter(handle=handle)
            .values_list("account_id", flat=True)
            .first()
        )

    @classmethod
    def suggest_handle(cls, display_name: str | None = None) -> str:
        """
        Generate a free handle from a display name.

        Keeps the letters and digits of the name (first 14, or "user") and
        appends an underscore and a random 4-digit number.

        Example:
            suggest_handle("Jane Doe!")  # e.g. "janedoe_4821"

        Raises:
            ConflictError: No free candidate found within the attempt budget
        """
        base = re.sub(r"[^a-z0-9]", "", (display_name or "").lower())
        base = base[:SUGGESTION_BASE_LENGTH] or "user"
        attempts = getattr(settings, "HANDLE_SUGGESTION_ATTEMPTS", 10)

        for _ in range(attempts):
            candidate = f"{base}_{1000 + secrets.randbelow(9000)}"
            if cls.is_available(candidate):
                return candidate

        cls.get_logger().warning(
            f"No free handle found for base '{base}' after {attempts} attempts"
        )
        raise ConflictError(
            "Could not generate a free handle. Please choose one.",
            error_code="HANDLE_SUGGESTION_EXHAUSTED",
            details={"base": base},
        )

    @classmethod
    def search_accounts(
        cls,
        term: str,
        exclude_account_id: UUID | str | None = None,
        limit: int | None = None,
    ) -> list[Profile]:
        """
        Find accounts by handle or exact email; never by display name.

        - "someone@example.com": exact, case-insensitive email match
        - "@ali" or "ali": exact handle first, then handle prefix matches

        Args:
            term: Raw search input
            exclude_account_id: Account to leave out (usually the caller)
            limit: Maximum results (HANDLE_SEARCH_LIMIT)

        Returns:
            Matching active profiles, exact handle match first; empty for
            terms shorter than two characters
        """
        from authentication.models import Profile

        if limit is None:
            limit = getattr(settings, "HANDLE_SEARCH_LIMIT", 8)
        raw = (term or "").strip()
        if len(raw) < MIN_SEARCH_LENGTH or limit <= 0:
            return []

        profiles = Profile.objects.select_related("user").filter(user__is_active=True)
        if exclude_account_id is not None:
            profiles = profiles.exclude(pk=exclude_account_id)

        if "@" in raw and "." in raw:
            return list(profiles.filter(user__email__iexact=raw)[:limit])

        handle = normalize_handle(raw)
        if not handle:
            return []

        results: list[Profile] = []
        owner = cls.lookup_account_by_handle(handle)
        if owner is not None:
            exact = profiles.filter(pk=owner).first()
            if exact is not None:
                results.append(exact)

        if len(results) < limit:
            seen = {p.pk for p in results}
            prefix_matches = profiles.filter(handle__startswith=handle).order_by("handle")
            for profile in prefix_matches[:limit]:
                if profile.pk not in seen:
                    results.append(profile)

        return results[:limit]
