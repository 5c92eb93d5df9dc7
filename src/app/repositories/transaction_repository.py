"""Transaction Repository Interface

Defines the contract for the append-only transaction log.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.transaction import Transaction


class TransactionRepository(ABC):
    """
    Repository interface for Transaction persistence

    Transactions are immutable and append-only. There is no update or
    delete operation.
    """

    @abstractmethod
    async def append(self, transaction: Transaction) -> Transaction:
        """
        Append a transaction to the account's log

        Args:
            transaction: Transaction entity to persist

        Returns:
            Persisted Transaction with generated ID
        """
        pass

    @abstractmethod
    async def list_recent(self, account_id: int, limit: int) -> List[Transaction]:
        """
        Most recent transactions of an account, newest first

        Args:
            account_id: Customer identifier
            limit: Maximum number of transactions to return

        Returns:
            Up to ``limit`` transactions ordered by creation, newest first
        """
        pass
