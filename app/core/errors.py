# File: app/core/errors.py

"""
Application errors and their HTTP mapping.

Services raise these to describe what went wrong; the handlers registered
by `register_exception_handlers` turn them into a JSON body of the form

    {"message": "...", "internal_code": "invalid_params"}
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    internal_code = "default_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParametersError(AppError):
    """Input rejected by validation or by a storage constraint."""

    internal_code = "invalid_params"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    internal_code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class DatabaseError(AppError):
    """A query failed for reasons unrelated to the caller's input."""

    internal_code = "database_error"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def error_body(message: str, internal_code: str) -> dict:
    return {"message": message, "internal_code": internal_code}


def format_validation_errors(exc: RequestValidationError) -> str:
    """
    Flatten FastAPI's validation error list into one readable line, e.g.
    "password: String should have at least 8 characters".
    """
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "header")]
        field = ".".join(loc)
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts) or "Invalid parameters"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.internal_code),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=InvalidParametersError.status_code,
            content=error_body(
                format_validation_errors(exc),
                InvalidParametersError.internal_code,
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", AppError.internal_code),
        )
