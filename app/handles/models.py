"""
Handle reservation model.

HandleReservation is the authoritative uniqueness record: its primary key is
the normalized handle, so the database itself guarantees at most one owner
per handle. Profile.handle mirrors the owner's current reservation.

Lifecycle:
    - Created when an account first claims a handle or changes to a new one
    - Deleted when the owner moves to a different handle, in the same
      transaction that creates the new reservation

Related files:
    - services.py: The only code that creates or deletes reservations
    - authentication/models.py: Profile.handle / Profile.handle_changed_at
"""

from django.conf import settings
from django.db import models
from django.utils import timezone


class HandleReservation(models.Model):
    """
    Binding of a normalized handle to the account that owns it.

    Fields:
        handle: Normalized handle (primary key)
        account: User owning the handle
        reserved_at: When the current owner claimed it

    Note:
        Do not create or delete rows directly; go through
        HandleReservationService so the account record stays consistent.
    """

    handle = models.CharField(
        max_length=20,
        primary_key=True,
        help_text="Normalized handle (lowercase)",
    )
    account = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="handle_reservations",
        help_text="Account that owns this handle",
    )
    reserved_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the handle was reserved by its current owner",
    )

    class Meta:
        db_table = "handles_reservation"
        verbose_name = "handle reservation"
        verbose_name_plural = "handle reservations"
        ordering = ["handle"]

    def __str__(self):
        return f"@{self.handle} -> {self.account_id}"
