"""
Exception Handlers.

Turns exceptions into the ErrorResponse envelope:

    ApplicationError        -> its class status_code and code
    RequestValidationError  -> 422 VAL_REQUEST_INVALID with per-field details
    anything else           -> 500 SYS_INTERNAL_ERROR

Internals of unexpected errors are only sent to the client when
features.api_detailed_errors is on.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sitekit.backend.core.config import get_app_config
from sitekit.backend.core.exceptions import ApplicationError, RateLimitError, ValidationError
from sitekit.backend.core.logging import get_logger
from sitekit.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)


def _get_request_id(request: Request) -> str | None:
    # Set by RequestContextMiddleware; the header covers apps without it
    request_id = getattr(request.state, "request_id", None)
    return request_id or request.headers.get("x-request-id")


def _request_fields(request: Request) -> dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": _get_request_id(request),
    }


def build_error_response(
    status_code: int,
    code: str,
    message: str,
    request_id: str | None = None,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render an ErrorResponse envelope. Shared by handlers and middleware."""
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details or None),
        metadata=ResponseMetadata(request_id=request_id),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    status_code = exc.status_code
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Server error" if status_code >= 500 else "Client error",
        extra={
            "code": exc.code,
            "message": exc.message,
            "status": status_code,
            **_request_fields(request),
        },
    )

    details = exc.details if isinstance(exc, ValidationError) else None
    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after_seconds:
        headers = {"Retry-After": str(exc.retry_after_seconds)}

    return build_error_response(
        status_code,
        exc.code,
        exc.message,
        request_id=_get_request_id(request),
        details=details,
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request: wrong types, missing body fields, bad query values."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", [])),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={"error_count": len(errors), **_request_fields(request)},
    )
    return build_error_response(
        422,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        request_id=_get_request_id(request),
        details={"validation_errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception",
        extra={"exception_type": type(exc).__name__, **_request_fields(request)},
    )

    details = None
    if get_app_config().features.api_detailed_errors:
        details = {"exception_type": type(exc).__name__, "exception": str(exc)}

    return build_error_response(
        500,
        "SYS_INTERNAL_ERROR",
        "An unexpected error occurred",
        request_id=_get_request_id(request),
        details=details,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.debug("Exception handlers registered")
