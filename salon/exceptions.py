"""
Global exception handlers and custom exception classes.
"""
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from .core.validation import ValidationResult, from_pydantic_errors

# Set up logging
logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "An unexpected error occurred"


class AppException(Exception):
    """
    Base exception class for application-specific exceptions.

    Attributes:
        status_code: HTTP status returned to the client
        detail: Human readable message
        reason: Stable, machine readable error code
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    reason = "server error"

    def __init__(self, detail: str, status_code: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        if reason is not None:
            self.reason = reason

    def extra(self) -> Dict[str, Any]:
        """Additional fields merged into the error body."""
        return {}


class ValidationException(AppException):
    """Raised when input is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST
    reason = "validation error"

    def __init__(self, detail: str = "Validation error", result: Optional[ValidationResult] = None):
        super().__init__(detail)
        self.result = result or ValidationResult()

    def extra(self) -> Dict[str, Any]:
        return {"errors": self.result.to_list()} if self.result.errors else {}


class NotFoundException(AppException):
    """Raised when the entity addressed by the request does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    reason = "not found"

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(detail)


class RateLimitException(AppException):
    """Raised when a client exceeds its request budget."""
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    reason = "rate limit exceeded"

    def __init__(self, detail: str = "Too many login attempts, please try again later"):
        super().__init__(detail)


def error_body(reason: str, message: str, **extra: Any) -> Dict[str, Any]:
    """Build the uniform error payload."""
    body = {"success": False, "error": reason, "message": message}
    body.update(extra)
    return body


def error_response(exc: AppException) -> JSONResponse:
    """
    Render an AppException as a JSON response.

    Used by the exception handlers and by middlewares, which run outside
    FastAPI's exception handling.
    """
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.reason, exc.detail, **exc.extra()),
        headers=headers,
    )


def server_error_response() -> JSONResponse:
    """Opaque 500 response; details stay in the server log."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("server error", SERVER_ERROR_MESSAGE),
    )


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.reason}: {exc.detail}")
    return error_response(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: 400 response listing the offending fields
    """
    result = from_pydantic_errors(exc.errors())
    logger.info(f"Validation error on {request.url.path}: {result.to_list()}")
    return error_response(ValidationException(result=result))


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Last-resort handler: log everything, leak nothing.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return server_error_response()


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
