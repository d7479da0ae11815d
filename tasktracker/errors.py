"""
Task Tracker API - Error Taxonomy

Application errors carry the HTTP status they map to and a message that is
safe to show to the client. Handlers are registered on the app in main.py.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def headers(self) -> dict | None:
        return None


class ValidationError(AppError):
    """Malformed or empty input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class ConflictError(AppError):
    """Duplicate unique key."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class AuthError(AppError):
    """Missing, invalid or expired token, or a failed login."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials"

    @property
    def headers(self) -> dict | None:
        return {"WWW-Authenticate": "Bearer"}


class NotFoundError(AppError):
    """Resource absent, or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InternalError(AppError):
    """Storage or hashing failure."""


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    # Only field locations and messages: submitted values (passwords) are never echoed
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or ValidationError.default_detail


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto JSON responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, InternalError):
            logger.error(f"Internal error on {request.method} {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _summarize_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": InternalError.default_detail},
        )
