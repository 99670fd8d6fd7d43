"""
Application package initializer.

The ledger is organised into small layers instead of a single
monolithic module: ``core`` (configuration, logging, database,
security and result types), ``models`` (plain records), ``stores``
(SQLite persistence), ``schemas`` (pydantic payloads), ``services``
(business rules) and ``api`` (versioned FastAPI routers).
"""

from .main import app  # noqa: F401
