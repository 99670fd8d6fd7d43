"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  Every function accepts an optional ``db_path`` so that
tests and alternative deployments can point the stores at a separate
file; when omitted, ``settings.database_url`` is used.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings


# SQLite INTEGER columns hold signed 64-bit values; larger Python ints
# make sqlite3 raise OverflowError when bound as parameters.
SQLITE_MAX_INTEGER = 2**63 - 1
SQLITE_MIN_INTEGER = -(2**63)


def fits_integer_column(value: int) -> bool:
    return SQLITE_MIN_INTEGER <= value <= SQLITE_MAX_INTEGER


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: users and loans
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS loans (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            amount REAL NOT NULL CHECK (amount >= 0),
            interest_rate REAL NOT NULL CHECK (interest_rate >= 0),
            duration_years INTEGER NOT NULL CHECK (duration_years >= 1),
            lender_id INTEGER NOT NULL,
            borrower_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(lender_id) REFERENCES users(id),
            FOREIGN KEY(borrower_id) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: indices on the user foreign keys of loans
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_loans_lender_id ON loans(lender_id);
        CREATE INDEX IF NOT EXISTS idx_loans_borrower_id ON loans(borrower_id);
        """,
    ),
]


def get_database_path(db_path: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the project root (the directory containing ``loan_ledger_api``).
    """
    db_url = db_path or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name, and foreign key enforcement is switched on for the lifetime
    of the connection (SQLite disables it by default).
    """
    conn = sqlite3.connect(get_database_path(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(db_path: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits and closes the connection on exit."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: Optional[str] = None) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies every entry of ``MIGRATIONS``
    with a higher version.  Returns the resulting schema version.
    """
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
    return current_version
