"""SQLAlchemy implementation of TransactionRepository

Append-only persistence for the per-account transaction log.
"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.transaction_repository import TransactionRepository
from src.domain.transaction import Transaction


class SqlAlchemyTransactionRepository(TransactionRepository):
    """
    SQLAlchemy implementation of TransactionRepository

    Features:
    - Immutable append-only transactions
    - Newest-first reads ordered by id (creation order)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, transaction: Transaction) -> Transaction:
        """
        Append a transaction

        The row is flushed, not committed: it becomes durable together with
        the balance update when the unit of work commits.
        """
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def list_recent(self, account_id: int, limit: int) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.account_id == account_id)
            .order_by(Transaction.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
