"""
Transactional boundary with retry on transient storage errors.

Every multi-record read-modify-write in the application goes through
run_in_transaction(). The callable receives no special arguments: it simply
performs ORM reads and writes, and all of them commit as one unit or none
of them do.

Storage errors are classified here, at the boundary, so callers only ever
see core.exceptions types:

    IntegrityError, serialization failure, deadlock   -> TransactionConflict
    statement/lock timeout, other database failures   -> StorageUnavailable

Both are retryable. Domain errors raised by the callable roll the
transaction back and propagate unchanged.

Usage:
    from core.transactions import run_in_transaction

    def _claim():
        profile = Profile.objects.select_for_update().get(pk=account_id)
        HandleReservation.objects.create(handle=handle, account_id=account_id)
        ...

    run_in_transaction(_claim, max_attempts=3)

Note:
    Retries only restart the whole unit when this is the outermost
    transaction. Inside an enclosing atomic() block the unit runs as a
    savepoint, so a retry re-runs the savepoint only.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import DatabaseError, IntegrityError, OperationalError, connections, transaction

from core.exceptions import BaseApplicationError, StorageUnavailable, TransactionConflict

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_SECONDS = 0.05
DEFAULT_TIMEOUT_SECONDS = 5.0

# PostgreSQL SQLSTATE codes
_CONFLICT_SQLSTATES = frozenset({"40001", "40P01", "23505"})
_TIMEOUT_SQLSTATES = frozenset({"57014", "55P03"})


def _sqlstate(exc: BaseException) -> str | None:
    """Return the driver-level SQLSTATE behind a Django database error."""
    cause = exc.__cause__
    if cause is None:
        return None
    return getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)


def classify_database_error(exc: DatabaseError) -> BaseApplicationError:
    """
    Translate a Django database error into an application error.

    Args:
        exc: The error raised by the ORM or the database driver

    Returns:
        TransactionConflict or StorageUnavailable (both retryable)
    """
    details = {"cause": exc.__class__.__name__}

    if isinstance(exc, IntegrityError):
        return TransactionConflict(
            "A concurrent update claimed the same record.",
            details=details,
        )

    sqlstate = _sqlstate(exc)
    if sqlstate:
        details["sqlstate"] = sqlstate
    if sqlstate in _CONFLICT_SQLSTATES:
        return TransactionConflict(
            "The transaction conflicted with a concurrent update.",
            details=details,
        )
    if sqlstate in _TIMEOUT_SQLSTATES:
        return StorageUnavailable(
            "The database did not respond in time.",
            error_code="STORAGE_TIMEOUT",
            details=details,
        )
    # SQLite reports an exhausted busy timeout as "database is locked"
    if isinstance(exc, OperationalError) and "locked" in str(exc).lower():
        return StorageUnavailable(
            "The database did not respond in time.",
            error_code="STORAGE_TIMEOUT",
            details=details,
        )
    return StorageUnavailable("The database is currently unavailable.", details=details)


def _apply_statement_timeout(using: str, timeout_seconds: float) -> None:
    """Bound every statement of the current transaction on PostgreSQL."""
    connection = connections[using]
    if connection.vendor != "postgresql" or not timeout_seconds:
        return
    with connection.cursor() as cursor:
        cursor.execute(
            "SELECT set_config('statement_timeout', %s, true)",
            [str(int(timeout_seconds * 1000))],
        )


def run_in_transaction(
    func: Callable[..., Any],
    *args: Any,
    max_attempts: int | None = None,
    backoff_seconds: float | None = None,
    timeout_seconds: float | None = None,
    using: str = "default",
    log: logging.Logger | None = None,
    **kwargs: Any,
) -> Any:
    """
    Run ``func(*args, **kwargs)`` atomically, retrying transient failures.

    Args:
        func: Callable performing the reads and writes of one unit
        max_attempts: Attempts before giving up (TRANSACTION_MAX_ATTEMPTS)
        backoff_seconds: Base delay, doubled after every failed attempt
            (TRANSACTION_BACKOFF_SECONDS)
        timeout_seconds: Per-statement bound on PostgreSQL
            (TRANSACTION_TIMEOUT_SECONDS)
        using: Database alias
        log: Logger for retry messages (defaults to this module's)

    Returns:
        Whatever ``func`` returns

    Raises:
        BaseApplicationError: Domain errors raised by ``func``, unchanged
        TransactionConflict: Still losing races after max_attempts
        StorageUnavailable: Database still failing after max_attempts
    """
    if max_attempts is None:
        max_attempts = getattr(settings, "TRANSACTION_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)
    if backoff_seconds is None:
        backoff_seconds = getattr(
            settings, "TRANSACTION_BACKOFF_SECONDS", DEFAULT_BACKOFF_SECONDS
        )
    if timeout_seconds is None:
        timeout_seconds = getattr(
            settings, "TRANSACTION_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
        )
    log = log or logger
    max_attempts = max(1, int(max_attempts))

    for attempt in range(1, max_attempts + 1):
        try:
            with transaction.atomic(using=using):
                _apply_statement_timeout(using, timeout_seconds)
                return func(*args, **kwargs)
        except BaseApplicationError as exc:
            if not exc.is_retryable:
                raise
            error, cause = exc, None
        except DatabaseError as exc:
            error, cause = classify_database_error(exc), exc

        if attempt >= max_attempts:
            log.warning(
                f"Transaction gave up after {attempt} attempts: {error}",
                extra={"error_code": error.error_code, "attempts": attempt},
            )
            if cause is not None:
                raise error from cause
            raise error

        delay = backoff_seconds * (2 ** (attempt - 1))
        log.info(
            f"Retrying transaction after {error.error_code} "
            f"(attempt {attempt}/{max_attempts}, sleeping {delay:.3f}s)",
            extra={"error_code": error.error_code, "attempt": attempt},
        )
        if delay > 0:
            time.sleep(delay)
