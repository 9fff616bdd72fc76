"""Global error handling to map domain errors and prevent information disclosure."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from directory_api.config import get_settings
from directory_api.exceptions import (
    AuthenticationError,
    DirectoryAPIError,
    NotFoundError,
    RecordValidationError,
    StorageUnavailableError,
    ValidationError,
    WeakPasswordError,
)
from directory_api.utils.secure_logging import sanitize_exception_message

logger = logging.getLogger(__name__)

DEFAULT_DEV_ORIGIN = "http://localhost:3000"


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run outside the CORS middleware, so error responses
    need the headers added here.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    settings = get_settings()
    allowed_origins = settings.cors_origins_list
    if not allowed_origins and settings.environment == "development":
        allowed_origins = [DEFAULT_DEV_ORIGIN]

    if origin in allowed_origins:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return {}


# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    401: "Authentication required",
    403: "Access denied",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    429: "Too many requests",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}

# Error messages that are safe to pass through
# These don't reveal internal implementation details
ALLOWED_ERROR_PATTERNS = [
    "Invalid credentials",
    "Authentication required",
    "Resource not found",
    "Employee not found",
    "Refresh token required",
    "Invalid or expired token",
    "Invalid token type",
    "Email already registered",
    "An employee with this email already exists",
]

# Domain error family -> HTTP status
DOMAIN_ERROR_STATUS: list[tuple[type[DirectoryAPIError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (StorageUnavailableError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def error_body(message: str, **extra: Any) -> dict[str, Any]:
    """Build the error envelope returned by every handler."""
    return {"success": False, "message": message, **extra}


def is_safe_error_message(message: str) -> bool:
    """Check if an error message is safe to expose to users.

    Args:
        message: Error message to check

    Returns:
        True if message is safe to expose
    """
    message_lower = message.lower()
    return any(pattern.lower() in message_lower for pattern in ALLOWED_ERROR_PATTERNS)


def sanitize_error_detail(detail: Any, status_code: int) -> str:
    """Sanitize error detail to prevent information disclosure.

    Args:
        detail: Original error detail
        status_code: HTTP status code

    Returns:
        Safe error message
    """
    if isinstance(detail, str) and is_safe_error_message(detail):
        return detail
    return SAFE_ERROR_MESSAGES.get(status_code, "Request failed")


def validation_messages(errors: list[dict[str, Any]], limit: int = 10) -> list[str]:
    """Reduce pydantic error entries to ``field: message`` strings.

    Only the field name is kept, never type details or the rejected input.
    """
    messages = []
    for error in errors:
        loc = error.get("loc", [])
        msg = error.get("msg", "Invalid value")
        field = loc[-1] if loc else "field"
        if isinstance(field, str) and not field.startswith("_"):
            messages.append(f"{field}: {msg}")
        else:
            messages.append(str(msg))
    return messages[:limit]


def status_for(exc: DirectoryAPIError) -> int:
    """Get the HTTP status for a domain error."""
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_exception_handler(request: Request, exc: DirectoryAPIError) -> JSONResponse:
    """Map domain errors raised by services to HTTP responses.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with the error envelope
    """
    settings = get_settings()
    cors_headers = _get_cors_headers(request)
    status_code = status_for(exc)

    extra: dict[str, Any] = {}
    if isinstance(exc, (RecordValidationError, WeakPasswordError)):
        extra["errors"] = exc.messages if isinstance(exc, RecordValidationError) else exc.errors

    if status_code >= 500:
        cause = exc.__cause__
        logger.error(
            f"{exc.message} for {request.url.path}: "
            f"{sanitize_exception_message(cause) if cause else exc.details}"
        )
        if settings.debug and cause is not None:
            extra["error"] = str(cause)
    elif status_code == status.HTTP_401_UNAUTHORIZED:
        logger.info(f"Rejected unauthenticated request to {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.message, **extra),
        headers=cors_headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    settings = get_settings()
    cors_headers = _get_cors_headers(request)

    if settings.debug:
        message = str(exc.detail)
    else:
        message = sanitize_error_detail(exc.detail, exc.status_code)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers={**cors_headers, **(exc.headers or {})},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request parsing failures as 400 validation errors.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with field messages
    """
    cors_headers = _get_cors_headers(request)

    logger.warning(f"Validation error for {request.url.path}: {validation_messages(exc.errors())}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation error", errors=validation_messages(exc.errors())),
        headers=cors_headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    settings = get_settings()
    cors_headers = _get_cors_headers(request)

    logger.error(f"Unhandled exception for {request.url.path}: {exc}", exc_info=True)

    if settings.debug:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(SAFE_ERROR_MESSAGES[500], error=str(exc), type=type(exc).__name__),
            headers=cors_headers,
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(SAFE_ERROR_MESSAGES[500]),
        headers=cors_headers,
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions that escaped the services.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    settings = get_settings()
    cors_headers = _get_cors_headers(request)

    logger.error(f"Database error for {request.url.path}: {exc}", exc_info=True)

    if isinstance(exc, IntegrityError):
        message = str(exc).lower()
        if "unique" in message or "duplicate" in message:
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content=error_body("Resource already exists"),
                headers=cors_headers,
            )

    extra = {"type": type(exc).__name__} if settings.debug else {}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Database error occurred", **extra),
        headers=cors_headers,
    )
