from contextlib import asynccontextmanager
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.ledger_engine import LedgerEngine, UnitOfWorkFactory


def create_engine(db_uri: str, echo: bool = False) -> AsyncEngine:
    return create_async_engine(db_uri, echo=echo, future=True)


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


def unit_of_work_factory(session_factory: sessionmaker) -> UnitOfWorkFactory:
    """Each call opens a session, wraps it in a unit of work and closes it on exit"""

    @asynccontextmanager
    async def scope():
        async with session_factory() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                yield uow

    return scope


def build_ledger_engine(session_factory: sessionmaker, config) -> LedgerEngine:
    return LedgerEngine(
        unit_of_work_factory(session_factory),
        statement_size=config.STATEMENT_TRANSACTIONS_LIMIT,
        max_attempts=config.APPLY_MAX_ATTEMPTS,
        retry_backoff_seconds=config.APPLY_RETRY_BACKOFF_SECONDS,
    )


async def get_ledger_engine(request: Request) -> LedgerEngine:
    return request.app.state.ledger_engine
