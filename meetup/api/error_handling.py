"""
API error handling.

Maps the domain exception taxonomy onto HTTP status codes and a uniform
ErrorResponse body. Internal diagnostics are logged, never returned.

Dependencies: fastapi, meetup.core.exceptions, meetup.models.common
System role: Error boundary between the session engine and HTTP clients
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meetup.core.exceptions import (
    MeetupException,
    NotFoundError,
    StoreError,
    ValidationError,
)
from meetup.models.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(
        "Invalid request",
        extra={"path": request.url.path, "field": exc.field, "error": exc.message},
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.details)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Reject malformed bodies and wrongly typed fields with the same 400 shape
    as domain validation. Only the offending field is reported; the rejected
    input is never echoed back.
    """
    errors = exc.errors()
    error = errors[0] if errors else {}
    if error.get("type") == "json_invalid":
        field, message = "body", "Malformed JSON body"
    else:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(location) or "body"
        message = f"Invalid value for {field}"
    logger.warning(
        "Rejected request payload",
        extra={"path": request.url.path, "field": field, "error_type": error.get("type")},
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, message, {"field": field})


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning("Resource not found", extra={"path": request.url.path, "error": exc.message})
    return _error_response(status.HTTP_404_NOT_FOUND, exc.message, exc.details)


async def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(
        "Store failure",
        exc_info=exc,
        extra={"path": request.url.path, "operation": exc.operation},
    )
    operation = (exc.operation or "process request").replace("_", " ")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        f"Failed to {operation}",
        {"operation": exc.operation} if exc.operation else None,
    )


async def handle_meetup_exception(request: Request, exc: MeetupException) -> JSONResponse:
    logger.error("Unhandled domain error", exc_info=exc, extra={"path": request.url.path})
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected failure", exc_info=exc, extra={"path": request.url.path})
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the domain exception handlers on an application.

    ValidationError and RequestValidationError -> 400, NotFoundError -> 404, everything else -> 500.

    Args:
        app: FastAPI application (or test app) to configure
    """
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(StoreError, handle_store_error)
    app.add_exception_handler(MeetupException, handle_meetup_exception)
    app.add_exception_handler(Exception, handle_unexpected)
