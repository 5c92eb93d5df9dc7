import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

import src.domain  # noqa: F401  registers the ledger tables
from src.app.services.ledger_engine import LedgerEngine
from src.depends import create_session_factory, get_ledger_engine, unit_of_work_factory
from src.worker.provision_accounts import provision_accounts


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a file-backed SQLite engine with a fresh schema per test"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'ledger_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def provision(session_factory):
    """Provision accounts given as (id, limit) pairs"""

    async def _provision(*accounts):
        return await provision_accounts(
            session_factory, [{"id": account_id, "limit": limit} for account_id, limit in accounts]
        )

    return _provision


@pytest_asyncio.fixture
async def ledger(session_factory):
    return LedgerEngine(unit_of_work_factory(session_factory), retry_backoff_seconds=0.001)


@pytest_asyncio.fixture
async def client(ledger):
    """Create test client with the ledger engine dependency overridden"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_ledger_engine():
        return ledger

    app.dependency_overrides[get_ledger_engine] = override_get_ledger_engine

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
