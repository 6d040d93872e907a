"""
API error handling.

Registers exception handlers that render every failure as an
ErrorResponse body with the matching HTTP status.

Dependencies: fastapi, jobtracker.core.exceptions, jobtracker.models.common
System role: Exception to HTTP response mapping
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jobtracker.core.exceptions import JobTrackerError
from jobtracker.models.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI puts first
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True, mode="json"),
    )


async def handle_domain_error(request: Request, exc: JobTrackerError) -> JSONResponse:
    """Render a domain exception with its own status."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request failed",
        extra={
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
            "error": exc.message,
        },
    )
    return _error_response(
        exc.status_code,
        ErrorResponse(error=exc.error, message=exc.message, details=exc.details or None),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render schema validation failures as 400 with field-level details."""
    details = [
        ErrorDetail(
            field=_field_name(tuple(error.get("loc", ()))),
            message=error.get("msg", "Invalid value"),
            code=error.get("type", "invalid"),
        )
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "fields": [d.field for d in details]},
    )
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(error="Validation failed", message="Invalid request data", details=details),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log an unhandled exception and hide its details from the client."""
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "error_type": type(exc).__name__, "error": str(exc)},
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(error="Internal error", message="An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the app."""
    app.add_exception_handler(JobTrackerError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
