"""
FastAPI dependencies that build services for a request.

Stores are cheap (they hold only a database path), so a fresh service
is assembled per request from the path stored on ``app.state`` by
``create_app``.
"""

from typing import Optional

from fastapi import Request

from loan_ledger_api.app.services.loan_service import LoanService
from loan_ledger_api.app.services.user_service import UserService
from loan_ledger_api.app.stores import LoanStore, UserStore


def _database_path(request: Request) -> Optional[str]:
    return getattr(request.app.state, "database_path", None)


def get_loan_service(request: Request) -> LoanService:
    db_path = _database_path(request)
    return LoanService(LoanStore(db_path), UserStore(db_path))


def get_user_service(request: Request) -> UserService:
    return UserService(UserStore(_database_path(request)))
