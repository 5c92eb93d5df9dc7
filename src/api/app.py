"""FastAPI application factory"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.error import ClientError, client_error_handler, request_validation_error_handler
from src.api.routes.ledger import router as ledger_router
from src.depends import build_ledger_engine, create_engine, create_session_factory
from src.worker.provision_accounts import create_schema, provision_accounts

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(config) -> FastAPI:
    logging.basicConfig(level=config.LOG_LEVEL, format=LOG_FORMAT)

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        import sentry_sdk

        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_engine(config.DB_URI, echo=config.DB_ECHO)
        session_factory = create_session_factory(engine)

        if config.AUTO_CREATE_SCHEMA:
            await create_schema(engine)
            await provision_accounts(session_factory, config.SEED_ACCOUNTS)

        app.state.ledger_engine = build_ledger_engine(session_factory, config)
        logger.info("Ledger service started")
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("Ledger service stopped")

    app = FastAPI(title="Customer Ledger Service", lifespan=lifespan)

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(ledger_router, prefix=config.API_PREFIX)

    return app
