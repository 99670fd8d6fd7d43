"""
Loan endpoints for API v1.

Reading loans is public.  Creating, updating and deleting require a
bearer token; the caller id resolved from it is handed to the
``LoanService`` explicitly.  Request bodies are read only after
authentication succeeded and are validated by the service, not by
FastAPI, so that ownership is always checked before the payload.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from loan_ledger_api.app.api.deps import get_loan_service
from loan_ledger_api.app.api.responses import read_json_object, result_response
from loan_ledger_api.app.core.security import get_current_user_id
from loan_ledger_api.app.schemas.envelope import Envelope
from loan_ledger_api.app.services.loan_service import LoanService


router = APIRouter()


@router.get("", response_model=Envelope)
async def list_loans(service: LoanService = Depends(get_loan_service)) -> JSONResponse:
    """List all loans with their lender and borrower (public)."""
    return result_response(await service.list_loans())


@router.get("/{loan_id}", response_model=Envelope)
async def get_loan(loan_id: int, service: LoanService = Depends(get_loan_service)) -> JSONResponse:
    """Retrieve a single loan by its ID (public).  Returns 404 if absent."""
    return result_response(await service.get_loan(loan_id))


@router.post("", response_model=Envelope, status_code=status.HTTP_201_CREATED)
async def create_loan(
    request: Request,
    caller_id: int = Depends(get_current_user_id),
    service: LoanService = Depends(get_loan_service),
) -> JSONResponse:
    """Create a loan lent by the authenticated user.

    Body: ``amount``, ``interest_rate``, ``duration_years`` and
    ``borrower_id``.  The borrower must exist and differ from the
    caller.
    """
    payload = await read_json_object(request)
    result = await service.create_loan(caller_id, payload)
    return result_response(result, success_code=status.HTTP_201_CREATED)


@router.patch("/{loan_id}", response_model=Envelope)
async def update_loan(
    loan_id: int,
    request: Request,
    caller_id: int = Depends(get_current_user_id),
    service: LoanService = Depends(get_loan_service),
) -> JSONResponse:
    """Partially update a loan.  Only its lender may do so."""
    payload = await read_json_object(request)
    return result_response(await service.update_loan(caller_id, loan_id, payload))


@router.delete("/{loan_id}", response_model=Envelope)
async def delete_loan(
    loan_id: int,
    caller_id: int = Depends(get_current_user_id),
    service: LoanService = Depends(get_loan_service),
) -> JSONResponse:
    """Delete a loan permanently.  Only its lender may do so."""
    return result_response(await service.delete_loan(caller_id, loan_id))
