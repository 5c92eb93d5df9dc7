"""Unit of Work Interface

Groups the account store and the transaction log behind a single
database transaction.
"""

from abc import ABC, abstractmethod
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.transaction_repository import TransactionRepository


class UnitOfWork(ABC):
    """
    One database transaction spanning both ledger stores

    Leaving the context without commit() rolls back every change made
    through ``accounts`` and ``transactions``.
    """

    accounts: AccountRepository
    transactions: TransactionRepository

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
