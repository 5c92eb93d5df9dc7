"""Ledger error kinds

Every failure the ledger reports is one of these. They travel inside a
``Result`` and are mapped to transport status codes by the API layer.
"""

from typing import Optional
from libs.result import Error


class LedgerError(Error):
    """Base class for ledger errors; subclasses fix the code"""

    code = "LEDGER_ERROR"
    retryable = False

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(type(self).code, message, reason)


class ValidationError(LedgerError):
    """Malformed input: bad amount, kind or description. Never mutates state."""

    code = "VALIDATION_ERROR"


class NotFoundError(LedgerError):
    """Unknown customer. Never mutates state."""

    code = "ACCOUNT_NOT_FOUND"


class LimitExceededError(LedgerError):
    """Debit would take the balance below -limit. Never mutates state."""

    code = "LIMIT_EXCEEDED"


class ConflictError(LedgerError):
    """Concurrent writer won the race; the identical request is safe to retry."""

    code = "CONFLICT"
    retryable = True


class StorageError(LedgerError):
    """Account store or transaction log failed; nothing was committed."""

    code = "STORAGE_ERROR"
