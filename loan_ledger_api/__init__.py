"""
Top‑level package for the Loan Ledger API.

This file makes ``loan_ledger_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``loan_ledger_api.app.main``.  Tests and the ``run.py`` launcher rely
on these absolute imports.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
