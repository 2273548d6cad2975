"""
Error taxonomy and JSON error responder.

Every non-2xx response leaves the service in the same envelope:

    {"error": str, "details"?: any, "code"?: str}

Stores and the validation engine raise ``ApiError`` subclasses; route
handlers never build error responses themselves. The handlers registered
by ``register_error_handlers`` translate them (and anything unexpected)
into the envelope.
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error carrying an HTTP status, an error code and optional details."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: Optional[str] = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details


class ValidationFailed(ApiError):
    """Request payload broke one or more field rules."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"

    def __init__(self, violations: list):
        super().__init__("Validation failed", details=violations)
        self.violations = violations


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.identifier = identifier


class Conflict(ApiError):
    """A unique field value is already taken by another live record."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str, code: str):
        super().__init__(message, code=code)


def error_body(error: str, details: Any = None, code: Optional[str] = None) -> dict:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    if code is not None:
        body["code"] = code
    return body


def error_response(status_code: int, error: str, details: Any = None, code: Optional[str] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(error, details, code))


def register_error_handlers(app: FastAPI) -> None:
    """Register the error responder on a FastAPI application."""
    # Imported here: validation imports ValidationFailed from this module.
    from app.validation import collect_violations

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.warning("%s %s -> %s %s: %s", request.method, request.url.path, exc.status_code, exc.code, exc.message)
        return error_response(exc.status_code, exc.message, exc.details, exc.code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Raised by FastAPI itself when the body is not parseable JSON or not an object.
        violations = collect_violations(None, exc.errors())
        logger.warning("%s %s -> 400 malformed request: %s", request.method, request.url.path, violations)
        return error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", violations, ValidationFailed.code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        code = NotFound.code if exc.status_code == status.HTTP_404_NOT_FOUND else None
        return error_response(exc.status_code, str(exc.detail), code=code)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", code=ApiError.code)
