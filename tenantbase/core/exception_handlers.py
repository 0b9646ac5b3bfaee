"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses (SRP, OCP for adding new handlers).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tenantbase.core.config import get_settings
from tenantbase.domain.exceptions import TenantbaseException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "TENANT_NOT_FOUND": 404,
    "TENANT_INACTIVE": 403,
    "TENANT_CONFLICT": 403,
    "TENANT_CONTEXT_MISSING": 400,
    "INVALID_TENANT_ID": 400,
    "ORIGIN_UNAVAILABLE": 503,
    "CACHE_UNAVAILABLE": 503,
}


def status_for(exc: TenantbaseException) -> int:
    """Return the HTTP status for a domain exception (400 when unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def tenantbase_error_response(exc: TenantbaseException) -> JSONResponse:
    """JSON body from exc.to_dict() with the mapped status code."""
    return JSONResponse(status_code=status_for(exc), content=exc.to_dict())


def _tenantbase_exception_handler(
    request: Request, exc: TenantbaseException
) -> JSONResponse:
    if status_for(exc) >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return tenantbase_error_response(exc)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: TenantbaseException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(TenantbaseException, _tenantbase_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
