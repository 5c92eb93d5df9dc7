from .base import BaseModel, utcnow, as_utc
from .account import Account
from .transaction import Transaction, TransactionKind
from .errors import (
    LedgerError,
    ValidationError,
    NotFoundError,
    LimitExceededError,
    ConflictError,
    StorageError,
)

__all__ = [
    "BaseModel",
    "utcnow",
    "as_utc",
    "Account",
    "Transaction",
    "TransactionKind",
    "LedgerError",
    "ValidationError",
    "NotFoundError",
    "LimitExceededError",
    "ConflictError",
    "StorageError",
]
