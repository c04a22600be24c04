"""
Handles application.

Globally unique, user-chosen handles with an atomic claim-and-cooldown
reservation protocol.

Key components:
    - HandleReservation model: normalized handle -> owning account
    - validators: normalization and format rules
    - HandleReservationService: reserve_initial, reserve_change,
      is_available, lookup_account_by_handle, suggest_handle, search_accounts

Usage:
    from handles.services import HandleReservationService
"""
