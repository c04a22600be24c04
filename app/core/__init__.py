"""
Core Application - Infrastructure & Base Classes

Generic, reusable building blocks with no knowledge of handles or accounts.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)
    - UUIDPrimaryKeyMixin: UUID as primary key

Services (import from core.services):
    - BaseService: Base class for service layer (logging, transactions)

Transactions (import from core.transactions):
    - run_in_transaction: All-or-nothing unit with retry on transient errors
    - classify_database_error: Storage error -> application error

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError, NotFoundError, ConflictError, RateLimitError,
      ExternalServiceError
    - TransactionConflict, StorageUnavailable: Retryable storage failures

Views (import from core.views):
    - health_check: Database connectivity probe
"""
