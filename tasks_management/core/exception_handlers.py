"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Domain exceptions carry an
error_code that selects the HTTP status. Database errors are a
DEPENDENCY_FAILURE (502); everything else is a 500.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasks_management.core.config import get_settings
from tasks_management.domain.exceptions import (
    DependencyFailureException,
    TasksManagementException,
)
from tasks_management.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "INVALID_TITLE": 400,
    "DEPENDENCY_FAILURE": 502,
}


def status_for_error_code(error_code: str | None) -> int:
    """HTTP status for a domain error code; unknown codes are client errors (400)."""
    return _ERROR_CODE_STATUS.get(error_code or "", 400)


def _domain_exception_handler(
    request: Request, exc: TasksManagementException
) -> JSONResponse:
    """Return JSON from TasksManagementException.to_dict() with the mapped status."""
    status = status_for_error_code(exc.error_code)
    if status >= 500:
        logger.error("Dependency failure on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Return 502 DEPENDENCY_FAILURE; the SQL and driver message stay in the log."""
    logger.error(
        "Database failure on %s %s", request.method, request.url.path, exc_info=exc
    )
    failure = DependencyFailureException(
        "database", f"{request.method} {request.url.path}", type(exc).__name__
    )
    return JSONResponse(
        status_code=status_for_error_code(failure.error_code), content=failure.to_dict()
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(TasksManagementException, _domain_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _database_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
