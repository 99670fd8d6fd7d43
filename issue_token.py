#!/usr/bin/env python3
"""
Print an access token for an existing user of the Loan Ledger database.

Handy for trying the protected loan routes with curl without going
through ``/api/login``.  The token is signed with the ``SECRET_KEY``
of the current environment, so run this with the same settings as the
server.

Usage:
    python issue_token.py --user-id 1 --days 30
"""

import argparse
import sys

from loan_ledger_api.app.core.db import get_database_path
from loan_ledger_api.app.core.security import create_access_token
from loan_ledger_api.app.stores import UserStore


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue a bearer token for a Loan Ledger user.")
    ap.add_argument("--user-id", type=int, required=True, help="ID of the user the token authenticates")
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days (default: 1)")
    ap.add_argument("--db", help="Path to the SQLite database (defaults to DATABASE_URL)")
    args = ap.parse_args()

    users = UserStore(get_database_path(args.db))
    user = users.get(args.user_id)
    if user is None:
        print(f"[!] No user found with id: {args.user_id}", file=sys.stderr)
        sys.exit(2)

    print(create_access_token({"sub": str(user.id)}, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
