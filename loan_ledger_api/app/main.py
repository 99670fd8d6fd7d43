"""
Main entrypoint for the Loan Ledger API.

This module assembles the FastAPI application, sets up logging,
registers the exception handlers that keep every response inside the
``{status, message, data}`` envelope and includes the versioned
routers.  ``create_app`` builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn loan_ledger_api.app.main:app --reload
"""

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.responses import envelope_response, unauthenticated_response
from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import get_database_path, init_db
from .core.logging_config import setup_logging
from .services.validation import describe_error


logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Every authentication failure looks the same to the client,
    # whatever the underlying reason was.
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        return unauthenticated_response(getattr(exc, "headers", None))
    return envelope_response(str(exc.detail), None, exc.status_code, getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "request"
        errors.setdefault(field, []).append(describe_error(field, error))
    return envelope_response(
        "Validation failed. Please check the input fields.",
        errors,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )


def create_app(database_path: Optional[str] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database_path : Optional[str]
        SQLite file used by this application instance.  Defaults to
        ``settings.database_url``; tests pass a temporary file.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.database_path = get_database_path(database_path)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        version = init_db(app.state.database_path)
        logger.info("Database %s ready at schema version %s", app.state.database_path, version)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
