"""Account Provisioning Worker

Creates the ledger schema and inserts accounts that do not exist yet.
Accounts are provisioned out of band: the ledger itself never creates
them. Existing accounts are left untouched, so the worker is safe to
re-run, and several API workers may seed the same database at once.
"""

import argparse
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import create_engine, create_session_factory
from src.domain import Account

logger = logging.getLogger(__name__)


async def create_schema(engine: AsyncEngine) -> None:
    try:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    except DBAPIError as e:
        # Lost a CREATE TABLE race to another process; the second pass only checks
        logger.info(f"Schema creation raced with another process, re-checking: {e.orig}")
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)


async def provision_accounts(
    session_factory: sessionmaker, accounts: Iterable[Dict[str, Any]]
) -> List[int]:
    """
    Insert missing accounts with a zero balance

    Args:
        session_factory: Async session factory
        accounts: Items with "id" and "limit"

    Returns:
        IDs of the accounts that were created
    """
    pending = []
    for item in accounts:
        account_id = int(item["id"])
        limit = int(item["limit"])
        if limit < 0:
            raise ValueError(f"Account {account_id}: limit must be >= 0, got {limit}")
        pending.append((account_id, limit))

    created: List[int] = []
    for account_id, limit in pending:
        if await _provision_account(session_factory, account_id, limit):
            created.append(account_id)
            logger.info(f"Provisioned account {account_id} with limit {limit}")

    return created


async def _provision_account(session_factory: sessionmaker, account_id: int, limit: int) -> bool:
    """Insert one account in its own transaction; False if it already exists"""
    async with session_factory() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            if await uow.accounts.get_by_id(account_id):
                logger.debug(f"Account {account_id} already provisioned, skipping")
                return False

            try:
                await uow.accounts.create(Account(id=account_id, limit=limit, balance=0))
                await uow.commit()
            except IntegrityError:
                # Another provisioner (e.g. a sibling API worker) inserted it after our check
                await uow.rollback()
                if await uow.accounts.get_by_id(account_id):
                    logger.debug(f"Account {account_id} provisioned concurrently, skipping")
                    return False
                raise

    return True


class AccountProvisionerWorker:
    """
    Standalone provisioning runner

    Usage:
        worker = AccountProvisionerWorker()
        created = await worker.run_once([{"id": 1, "limit": 100000}])
        await worker.shutdown()
    """

    def __init__(self, db_uri: Optional[str] = None):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.engine = create_engine(self.db_uri)
        self.async_session_factory = create_session_factory(self.engine)

    async def run_once(
        self, accounts: Iterable[Dict[str, Any]], with_schema: bool = True
    ) -> List[int]:
        if with_schema:
            await create_schema(self.engine)
        return await provision_accounts(self.async_session_factory, accounts)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("AccountProvisionerWorker shutdown complete")


def parse_account(value: str) -> Dict[str, int]:
    """Parse an ID:LIMIT pair"""
    try:
        account_id, limit = value.split(":", 1)
        parsed = {"id": int(account_id), "limit": int(limit)}
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ID:LIMIT, got {value!r}")
    if parsed["limit"] < 0:
        raise argparse.ArgumentTypeError(f"limit must be >= 0, got {parsed['limit']}")
    return parsed


async def main(argv: Optional[List[str]] = None):
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Provision SEED_ACCOUNTS from config
        python -m src.worker.provision_accounts

        # Provision explicit accounts
        python -m src.worker.provision_accounts --account 1:100000 --account 2:80000
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Account Provisioning Worker")
    parser.add_argument(
        "--account", action="append", type=parse_account, default=None,
        help="Account to provision as ID:LIMIT (repeatable, default: SEED_ACCOUNTS)"
    )
    parser.add_argument(
        "--no-create-schema", action="store_true", help="Skip table creation"
    )
    parser.add_argument(
        "--db-uri", default=None, help="Database URI (default: DB_URI from config)"
    )
    args = parser.parse_args(argv)

    accounts = args.account or ApplicationConfig.SEED_ACCOUNTS
    worker = AccountProvisionerWorker(db_uri=args.db_uri)

    try:
        created = await worker.run_once(accounts, with_schema=not args.no_create_schema)
        print(f"Provisioning complete: {len(created)} account(s) created")
        for account_id in created:
            print(f"  - {account_id}")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
