"""Error Handlers — global exception handlers for the FitSync API.

Invariants:
    - FitSyncError → its http_status with the structured envelope
    - RequestValidationError → 400 with the first failing field's message + field-level details
    - Unknown routes → 404 "Route not found"
    - Exception (catch-all) → 500, never leaks internal details, always logged with traceback
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fitsync.core.errors import ErrorSeverity, FitSyncError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_fitsync_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_fitsync_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FitSyncError)
    async def fitsync_error_handler(request: Request, exc: FitSyncError):
        """Handle all FitSync domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"FitSyncError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = (
            "Route not found" if exc.status_code == status.HTTP_404_NOT_FOUND
            else str(exc.detail)
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Something went wrong!",
                "error": {
                    "code": "INTERNAL_ERROR",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _field_name(loc: tuple) -> str:
    # drop the "body"/"query"/"path" prefix
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def _error_message(error: dict) -> str:
    ctx_error = (error.get("ctx") or {}).get("error")
    if error.get("type") == "value_error" and ctx_error:
        return str(ctx_error)
    return f"{_field_name(error['loc'])}: {error['msg']}"


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    errors = exc.errors()
    return {
        "success": False,
        "message": _error_message(errors[0]) if errors else "Invalid request data",
        "error": {
            "code": "VALIDATION_ERROR",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": _field_name(e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in errors
            ],
        },
    }
