"""
Exception Handlers.

Every error leaves the API in the ErrorResponse envelope:

    {"success": false, "data": null,
     "error": {"code": ..., "message": ..., "details": ...},
     "metadata": {"timestamp": ..., "request_id": ...}}

Application errors use EXCEPTION_STATUS_MAP, malformed requests are
400 VAL_REQUEST_INVALID, anything else is 500 SYS_INTERNAL_ERROR.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notes_api.core.exceptions import (
    ApplicationError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from notes_api.core.logging import get_logger
from notes_api.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    StorageError: 500,
}


def status_for(exc: ApplicationError) -> int:
    """HTTP status of the closest mapped base class, 500 if none."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return 500


def _get_request_id(request: Request) -> str | None:
    """Request ID set by RequestContextMiddleware, else the raw header."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _respond(request: Request, status_code: int, error: ErrorDetail) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _log_context(request: Request, **extra: Any) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": _get_request_id(request),
        **extra,
    }


def _violations(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request rejected" if status_code < 500 else "Request failed",
        extra=_log_context(request, code=exc.code, message=exc.message, status=status_code),
    )

    details = exc.details if isinstance(exc, ValidationError) else None
    return _respond(
        request,
        status_code,
        ErrorDetail(code=exc.code, message=exc.message, details=details or None),
    )


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed bodies and query strings are reported per field with status 400."""
    violations = _violations(exc)
    logger.warning(
        "Request validation failed",
        extra=_log_context(request, error_count=len(violations)),
    )
    return _respond(
        request,
        400,
        ErrorDetail(
            code="VAL_REQUEST_INVALID",
            message="Request validation failed",
            details={"validation_errors": violations},
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log with traceback, answer without internals."""
    logger.exception(
        "Unhandled exception",
        extra=_log_context(request, exception_type=type(exc).__name__),
    )
    return _respond(
        request,
        500,
        ErrorDetail(code="SYS_INTERNAL_ERROR", message="An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
