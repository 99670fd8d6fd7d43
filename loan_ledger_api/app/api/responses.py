"""
Rendering of the uniform response envelope.

Endpoints never build JSON bodies by hand: successes and service
errors go through ``result_response`` and everything else through
``envelope_response``.  The error tag of a ``ServiceResult`` alone
decides the status code.
"""

from typing import Any

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from loan_ledger_api.app.core.results import ErrorKind, ServiceResult
from loan_ledger_api.app.schemas.envelope import Envelope


UNAUTHENTICATED_MESSAGE = "Unauthenticated. Please log in to access this resource."

STATUS_BY_ERROR = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.SELF_LOAN_FORBIDDEN: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
}


def envelope_response(
    message: str,
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
    headers: Any = None,
) -> JSONResponse:
    """Build an envelope; the ``status`` field follows the status code."""
    body = Envelope(
        status="success" if status_code < 400 else "error",
        message=message,
        data=jsonable_encoder(data),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def result_response(result: ServiceResult, success_code: int = status.HTTP_200_OK) -> JSONResponse:
    if result.ok:
        return envelope_response(result.message, result.value, success_code)
    error = result.error
    return envelope_response(error.message, error.details, STATUS_BY_ERROR[error.kind])


def unauthenticated_response(headers: Any = None) -> JSONResponse:
    return envelope_response(UNAUTHENTICATED_MESSAGE, None, status.HTTP_401_UNAUTHORIZED, headers)


async def read_json_object(request: Request) -> dict:
    """Return the request body as a dict.

    Empty bodies, malformed JSON and JSON values other than objects all
    count as an empty payload, so validation reports the missing fields.
    """
    body = await request.body()
    if not body:
        return {}
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
