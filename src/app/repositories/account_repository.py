"""Account Repository Interface

Defines the contract for account persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.account import Account


class AccountRepository(ABC):
    """
    Repository interface for Account persistence

    Balance writes go through compare_and_set_balance so that a writer
    which lost a race is detected instead of silently overwriting.
    """

    @abstractmethod
    async def get_by_id(self, account_id: int, for_update: bool = False) -> Optional[Account]:
        """
        Retrieve account by ID

        Args:
            account_id: Customer identifier
            for_update: If True, lock the row with SELECT FOR UPDATE (pessimistic lock)

        Returns:
            Account if found, None otherwise
        """
        pass

    @abstractmethod
    async def compare_and_set_balance(
        self, account_id: int, expected_balance: int, new_balance: int
    ) -> bool:
        """
        Atomically replace the balance if it still equals expected_balance

        Args:
            account_id: Customer identifier
            expected_balance: Balance read at the start of the operation
            new_balance: Balance to store

        Returns:
            True if the row was updated, False if the balance had changed
        """
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """
        Provision a new account

        Args:
            account: Account entity to persist

        Returns:
            Created Account
        """
        pass
