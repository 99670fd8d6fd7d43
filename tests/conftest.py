"""Pytest configuration and fixtures for the loan ledger tests."""

import itertools

import pytest
from fastapi.testclient import TestClient

from loan_ledger_api.app.core.db import init_db
from loan_ledger_api.app.core.security import create_access_token, hash_password
from loan_ledger_api.app.main import create_app
from loan_ledger_api.app.services.loan_service import LoanService
from loan_ledger_api.app.stores import LoanStore, UserStore

PASSWORD = "password123"
# Hashing is deliberately slow; one hash serves every fixture user.
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "ledger.db")
    init_db(path)
    return path


@pytest.fixture
def users(db_path):
    return UserStore(db_path)


@pytest.fixture
def loans(db_path):
    return LoanStore(db_path)


@pytest.fixture
def service(loans, users):
    return LoanService(loans, users)


@pytest.fixture
def make_user(users):
    counter = itertools.count(1)

    def _make(name=None):
        n = next(counter)
        return users.create(name or f"User {n}", f"user{n}@example.com", PASSWORD_HASH)

    return _make


@pytest.fixture
def lender(make_user):
    return make_user("Alice Lender")


@pytest.fixture
def borrower(make_user):
    return make_user("Bob Borrower")


@pytest.fixture
def client(db_path):
    app = create_app(db_path)
    with TestClient(app) as test_client:
        yield test_client


def auth_headers(user_id):
    """Authorization header carrying a valid token for ``user_id``."""
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user_id)})}"}


@pytest.fixture
def headers_for():
    return auth_headers
