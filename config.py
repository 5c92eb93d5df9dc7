import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("LEDGER_CONFIG_FILE", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./ledger.db")
    DB_ECHO = bool(data.get("DB_ECHO", False))
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_WORKERS = data.get("API_WORKERS", 1)
    API_RELOAD = bool(data.get("API_RELOAD", False))  # Incompatible with API_WORKERS > 1
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Ledger
    STATEMENT_TRANSACTIONS_LIMIT = data.get("STATEMENT_TRANSACTIONS_LIMIT", 10)
    APPLY_MAX_ATTEMPTS = data.get("APPLY_MAX_ATTEMPTS", 5)  # Total attempts per transaction
    APPLY_RETRY_BACKOFF_SECONDS = data.get("APPLY_RETRY_BACKOFF_SECONDS", 0.005)  # Linear step

    # Provisioning: create tables and insert missing accounts on startup
    AUTO_CREATE_SCHEMA = bool(data.get("AUTO_CREATE_SCHEMA", True))
    SEED_ACCOUNTS = data.get(
        "SEED_ACCOUNTS",
        [
            {"id": 1, "limit": 100000},
            {"id": 2, "limit": 80000},
            {"id": 3, "limit": 1000000},
            {"id": 4, "limit": 10000000},
            {"id": 5, "limit": 500000},
        ],
    )
