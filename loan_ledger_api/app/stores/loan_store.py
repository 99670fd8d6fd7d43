"""
SQLite storage for loans.

Each method opens its own connection and closes it before returning,
so a store instance holds no state besides the database path and can
be shared freely between requests.
"""

import sqlite3
from dataclasses import replace
from typing import List, Optional

from loan_ledger_api.app.core.db import fits_integer_column, get_connection
from loan_ledger_api.app.models import Loan


_COLUMNS = "id, amount, interest_rate, duration_years, lender_id, borrower_id, created_at, updated_at"


def _row_to_loan(row: sqlite3.Row) -> Loan:
    return Loan(
        id=row["id"],
        amount=row["amount"],
        interest_rate=row["interest_rate"],
        duration_years=row["duration_years"],
        lender_id=row["lender_id"],
        borrower_id=row["borrower_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class LoanStore:
    """Read and write ``Loan`` records in the ``loans`` table."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path

    def list_all(self) -> List[Loan]:
        conn = get_connection(self.db_path)
        try:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM loans ORDER BY id").fetchall()
            return [_row_to_loan(row) for row in rows]
        finally:
            conn.close()

    def get(self, loan_id: int) -> Optional[Loan]:
        if not fits_integer_column(loan_id):
            return None
        conn = get_connection(self.db_path)
        try:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM loans WHERE id = ?", (loan_id,)
            ).fetchone()
            return _row_to_loan(row) if row else None
        finally:
            conn.close()

    def create(self, loan: Loan) -> Loan:
        """Insert ``loan`` and return it with its id and timestamps filled in."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO loans (amount, interest_rate, duration_years, lender_id, borrower_id)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    loan.amount,
                    loan.interest_rate,
                    loan.duration_years,
                    loan.lender_id,
                    loan.borrower_id,
                ),
            )
            loan_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM loans WHERE id = ?", (loan_id,)
            ).fetchone()
            return _row_to_loan(row)
        finally:
            conn.close()

    def update(self, loan: Loan) -> Loan:
        """Persist the mutable fields of ``loan``.

        The lender and borrower columns are never written here.  Raises
        ``ValueError`` if the loan has no id.
        """
        if loan.id is None:
            raise ValueError("Cannot update a loan that was never stored")
        conn = get_connection(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE loans
                SET amount = ?, interest_rate = ?, duration_years = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (loan.amount, loan.interest_rate, loan.duration_years, loan.id),
            )
            conn.commit()
            row = cursor.execute(
                "SELECT updated_at FROM loans WHERE id = ?", (loan.id,)
            ).fetchone()
            return replace(loan, updated_at=row["updated_at"]) if row else loan
        finally:
            conn.close()

    def delete(self, loan_id: int) -> bool:
        """Remove a loan permanently.  Returns ``False`` if nothing was deleted."""
        if not fits_integer_column(loan_id):
            return False
        conn = get_connection(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM loans WHERE id = ?", (loan_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
