"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any setup.  In a production
deployment you should at least override ``SECRET_KEY`` and
``DATABASE_URL``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Loan Ledger API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file.  Empty means console only.
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Path of the SQLite database file.  Relative paths are resolved
    # against the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "loan_ledger.db")

    # Prefix under which the versioned routers are mounted, so the
    # loan endpoints live at ``/api/loans`` by default.
    api_prefix: str = os.getenv("API_PREFIX", "/api")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must therefore be set before this module is imported.
settings = Settings()
