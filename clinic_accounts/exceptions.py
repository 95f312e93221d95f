"""
Global exception handlers and custom exception classes.

Every failure leaving the service maps to exactly one of the classes below;
anything else is treated as an internal error and reported generically.
"""
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import logging

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.

    Args:
        status_code: HTTP status returned to the caller
        detail: Caller-safe message
        extra: Additional caller-safe fields merged into the response body
    """
    def __init__(self, status_code: int, detail: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.extra = extra or {}


class ValidationException(AppException):
    """Missing or malformed input (400)."""
    def __init__(self, detail: str = "Invalid request", extra: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, extra)


class AuthenticationException(AppException):
    """Caller is not authenticated (401)."""
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail)


class AuthorizationException(AppException):
    """Caller is authenticated but not allowed (403)."""
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status.HTTP_403_FORBIDDEN, detail)


class NotFoundException(AppException):
    """Unknown id, or id referencing an account of the wrong role (404)."""
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class ConflictException(AppException):
    """Write rejected by a uniqueness or referential rule (409)."""
    def __init__(self, detail: str = "Conflict", extra: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_409_CONFLICT, detail, extra)


class InternalServerException(AppException):
    """Unexpected store or codec failure (500). Detail is always generic."""
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.
    
    Args:
        request: The request that caused the exception
        exc: The exception instance
        
    Returns:
        JSONResponse: Standardized error response
    """
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.method} {request.url.path}: {exc.detail}")
    else:
        logger.info(f"Request rejected on {request.method} {request.url.path}: {exc.status_code} {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, **exc.extra}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Malformed input is a client error; it is reported as 400 with the
    field-level validation messages.
    
    Args:
        request: The request that caused the exception
        exc: The validation exception instance
        
    Returns:
        JSONResponse: Standardized error response with validation details
    """
    logger.info(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation error",
            "errors": jsonable_encoder(exc.errors(), exclude={"input", "ctx", "url"})
        }
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Last-resort handler: log everything server-side, reveal nothing.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


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
