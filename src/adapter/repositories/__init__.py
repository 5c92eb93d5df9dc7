from .account_repository import SqlAlchemyAccountRepository
from .transaction_repository import SqlAlchemyTransactionRepository

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyTransactionRepository",
]
