"""
Plain records for the ledger's two entities.

These dataclasses carry data only.  Reading and writing them is the
job of the stores in ``app.stores``; turning them into API payloads
is the job of the pydantic schemas in ``app.schemas``.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    id: int
    name: str
    email: str
    # PBKDF2 "salthex$hashhex" string; never serialised to clients.
    password: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Loan:
    """A loan between a lender and a borrower.

    ``id`` is ``None`` until the store persists the record.  Only
    ``amount``, ``interest_rate`` and ``duration_years`` may change
    after creation.
    """

    amount: float
    interest_rate: float
    duration_years: int
    lender_id: int
    borrower_id: int
    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
