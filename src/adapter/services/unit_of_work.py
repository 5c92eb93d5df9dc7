from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories.account_repository import SqlAlchemyAccountRepository
from src.adapter.repositories.transaction_repository import SqlAlchemyTransactionRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session
        self.accounts = SqlAlchemyAccountRepository(session)
        self.transactions = SqlAlchemyTransactionRepository(session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
