"""
Persistence layer.

Stores translate between the plain records in ``app.models`` and the
SQLite tables created by ``core.db``.  They contain no business rules;
services decide what may be written and stores only write it.
"""

from .loan_store import LoanStore  # noqa: F401
from .user_store import UserStore  # noqa: F401
