"""
Top‑level router for version 1 of the API.

Aggregates the domain routers under a unified prefix.  Registration
and login live at the root (``/register``, ``/login``) and the loan
resource under ``/loans``.
"""

from fastapi import APIRouter

from .endpoints import auth, loans


router = APIRouter()

router.include_router(auth.router, tags=["auth"])
router.include_router(loans.router, prefix="/loans", tags=["loans"])
