import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import MissingGreenlet


@pytest.fixture
def mock_uow():
    """Mock unit of work with mocked account and transaction repositories"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.accounts = MagicMock()
    uow.transactions = MagicMock()
    return uow


class ExpiringAccount:
    """
    Account stand-in that behaves like a loaded ORM instance across rollback

    After expire() every column read raises MissingGreenlet, which is what an
    expired instance does when touched outside the async session's greenlet.
    """

    def __init__(self, id, limit, balance):
        self._values = {"id": id, "limit": limit, "balance": balance}
        self._expired = False

    def expire(self):
        self._expired = True

    def __getattr__(self, name):
        values = self.__dict__["_values"]
        if name not in values:
            raise AttributeError(name)
        if self.__dict__["_expired"]:
            raise MissingGreenlet(f"attribute {name!r} refreshed after rollback")
        return values[name]

    def allows(self, new_balance):
        return new_balance >= -self.limit


@pytest.fixture
def expiring_account(mock_uow):
    """Factory for accounts that expire when the mocked unit of work rolls back"""
    accounts = []

    def _make(id=1, limit=1000, balance=0):
        account = ExpiringAccount(id, limit, balance)
        accounts.append(account)
        mock_uow.accounts.get_by_id = AsyncMock(return_value=account)
        return account

    async def expire_all():
        for account in accounts:
            account.expire()

    mock_uow.rollback = AsyncMock(side_effect=expire_all)
    return _make
