"""
Base service layer patterns for business logic encapsulation.

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.
    Expected failures (taken handle, cooldown) are raised as
    core.exceptions subclasses; views translate them into responses.

Usage:
    from core.services import BaseService

    class HandleReservationService(BaseService):
        @classmethod
        def reserve_initial(cls, account_id, handle):
            def _step():
                ...  # reads and writes
            cls.run_atomic(_step)
            cls.get_logger().info(f"Reserved {handle}")

Related:
    - core.exceptions: Error hierarchy
    - core.transactions: Retrying transactional boundary
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

from core.transactions import run_in_transaction

if TYPE_CHECKING:
    from collections.abc import Callable, Generator
    from typing import Any


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Raise core.exceptions subclasses for expected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back. No retry is attempted; use
        run_atomic() for steps that must survive lost races.
        """
        with transaction.atomic():
            yield

    @classmethod
    def run_atomic(cls, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Run ``func`` as one all-or-nothing unit with retry on transient errors.

        Thin wrapper over core.transactions.run_in_transaction() that tags
        retry logging with the service's logger.
        """
        kwargs.setdefault("log", cls.get_logger())
        return run_in_transaction(func, *args, **kwargs)
