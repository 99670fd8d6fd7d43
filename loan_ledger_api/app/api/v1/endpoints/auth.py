"""
Registration and login endpoints for API v1.

Both return the user summary together with a bearer token to send as
``Authorization: Bearer <token>`` on the protected loan routes.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from loan_ledger_api.app.api.deps import get_user_service
from loan_ledger_api.app.api.responses import read_json_object, result_response
from loan_ledger_api.app.schemas.envelope import Envelope
from loan_ledger_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=Envelope, status_code=status.HTTP_201_CREATED)
async def register_user(request: Request, service: UserService = Depends(get_user_service)) -> JSONResponse:
    """Register a new user with ``name``, ``email`` and ``password``."""
    payload = await read_json_object(request)
    return result_response(await service.register(payload), success_code=status.HTTP_201_CREATED)


@router.post("/login", response_model=Envelope)
async def login_user(request: Request, service: UserService = Depends(get_user_service)) -> JSONResponse:
    """Exchange ``email`` and ``password`` for an access token."""
    payload = await read_json_object(request)
    return result_response(await service.authenticate(payload))
