"""Integration tests for account provisioning"""

import asyncio

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from src.adapter.repositories.account_repository import SqlAlchemyAccountRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.worker.provision_accounts import create_schema, provision_accounts

SEED = [
    {"id": 1, "limit": 100000},
    {"id": 2, "limit": 80000},
    {"id": 3, "limit": 1000000},
    {"id": 4, "limit": 10000000},
    {"id": 5, "limit": 500000},
]


class TestProvisionAccounts:

    @pytest.mark.asyncio
    async def test_creates_missing_accounts(self, provision, session_factory):
        # Act
        created = await provision((1, 100000), (2, 80000))

        # Assert
        assert created == [1, 2]
        async with session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)
            account = await uow.accounts.get_by_id(2)
            assert (account.limit, account.balance) == (80000, 0)

    @pytest.mark.asyncio
    async def test_rerun_leaves_existing_accounts_untouched(self, provision, ledger, session_factory):
        # Arrange
        await provision((1, 1000))
        await ledger.apply_transaction(1, 400, "d", "spent")

        # Act
        created = await provision((1, 5), (3, 10))

        # Assert
        assert created == [3]
        async with session_factory() as session:
            account = await SqlAlchemyUnitOfWork(session).accounts.get_by_id(1)
            assert (account.limit, account.balance) == (1000, -400)

    @pytest.mark.asyncio
    async def test_negative_limit_is_rejected(self, provision, session_factory):
        with pytest.raises(ValueError):
            await provision((1, 10), (2, -1))

        # Nothing from the batch is inserted
        async with session_factory() as session:
            assert await SqlAlchemyUnitOfWork(session).accounts.get_by_id(1) is None


class TestConcurrentProvisioning:
    """Several API workers seed the same database at startup"""

    @pytest.mark.asyncio
    async def test_concurrent_runs_insert_each_account_once(self, session_factory):
        # Act
        results = await asyncio.gather(
            provision_accounts(session_factory, SEED),
            provision_accounts(session_factory, SEED),
            return_exceptions=True,
        )

        # Assert
        assert not [r for r in results if isinstance(r, BaseException)]
        assert sorted(results[0] + results[1]) == [1, 2, 3, 4, 5]
        async with session_factory() as session:
            uow = SqlAlchemyUnitOfWork(session)
            for item in SEED:
                account = await uow.accounts.get_by_id(item["id"])
                assert (account.limit, account.balance) == (item["limit"], 0)

    @pytest.mark.asyncio
    async def test_insert_lost_to_another_provisioner_counts_as_existing(
        self, provision, monkeypatch
    ):
        """The existence check misses a row another worker commits just before our insert"""
        # Arrange
        await provision((1, 1000))
        original_get_by_id = SqlAlchemyAccountRepository.get_by_id
        reads = []

        async def stale_first_read(self, account_id, for_update=False):
            reads.append(account_id)
            if len(reads) == 1:
                return None
            return await original_get_by_id(self, account_id, for_update=for_update)

        monkeypatch.setattr(SqlAlchemyAccountRepository, "get_by_id", stale_first_read)

        # Act
        created = await provision((1, 5))

        # Assert
        assert created == []
        assert reads == [1, 1]

    @pytest.mark.asyncio
    async def test_concurrent_schema_creation(self, tmp_path):
        # Arrange
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")

        try:
            # Act
            await asyncio.gather(create_schema(engine), create_schema(engine))

            # Assert
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            assert {"accounts", "transactions"} <= set(tables)
        finally:
            await engine.dispose()
