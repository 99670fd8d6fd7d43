"""
SQLite storage for users.

Loans only reference users; the store offers the lookups the loan and
user services need (by id, in bulk, by e-mail) plus insertion of newly
registered accounts.
"""

import sqlite3
from typing import Dict, Iterable, Optional

from loan_ledger_api.app.core.db import fits_integer_column, get_connection
from loan_ledger_api.app.models import User


_COLUMNS = "id, name, email, password, created_at, updated_at"


def _row_to_user(row: sqlite3.Row) -> User:
    return User(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password=row["password"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserStore:
    """Read and write ``User`` records in the ``users`` table."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path

    def get(self, user_id: int) -> Optional[User]:
        if not fits_integer_column(user_id):
            return None
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            return _row_to_user(row) if row else None
        finally:
            conn.close()

    def get_many(self, user_ids: Iterable[int]) -> Dict[int, User]:
        """Return the users with the given ids keyed by id; unknown ids are skipped."""
        ids = sorted(uid for uid in set(user_ids) if fits_integer_column(uid))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM users WHERE id IN ({placeholders})", tuple(ids)
            ).fetchall()
            return {row["id"]: _row_to_user(row) for row in rows}
        finally:
            conn.close()

    def get_by_email(self, email: str) -> Optional[User]:
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM users WHERE email = ?", (email,)
            ).fetchone()
            return _row_to_user(row) if row else None
        finally:
            conn.close()

    def exists(self, user_id: int) -> bool:
        if not fits_integer_column(user_id):
            return False
        conn = get_connection(self.db_path)
        try:
            row = conn.execute("SELECT 1 FROM users WHERE id = ?", (user_id,)).fetchone()
            return row is not None
        finally:
            conn.close()

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Insert a user.  The e-mail must not be taken (``sqlite3.IntegrityError`` otherwise)."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
                (name, email, password_hash),
            )
            user_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            return _row_to_user(row)
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
