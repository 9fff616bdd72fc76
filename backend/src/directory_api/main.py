"""FastAPI application entry point."""

import asyncio
import logging
import os
import signal
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from directory_api import __version__
from directory_api.config import Settings, get_settings
from directory_api.database import check_database, engine
from directory_api.exceptions import DirectoryAPIError
from directory_api.middleware.error_handler import (
    DEFAULT_DEV_ORIGIN,
    domain_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from directory_api.middleware.security_headers import SecurityHeadersMiddleware
from directory_api.routers import auth, employees, subscriptions
from directory_api.security.rate_limit import limiter

logger = logging.getLogger(__name__)


def _handle_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Log an exception nobody awaited and shut the process down.

    A task failing in the background leaves the service in an unknown state,
    so the server is asked to stop instead of carrying on.
    """
    exc = context.get("exception")
    logger.critical(
        f"Unhandled error in event loop: {context.get('message', 'no message')}",
        exc_info=exc,
    )
    os.kill(os.getpid(), signal.SIGTERM)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    asyncio.get_running_loop().set_exception_handler(_handle_loop_exception)
    if not await check_database():
        logger.warning("Database is not reachable at startup")
    logger.info(f"{app.title} {__version__} started")
    yield
    # Shutdown
    await engine.dispose()


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Rate limit handler using the standard error envelope.

    Includes Retry-After header per RFC 6585 Section 4.
    """
    return JSONResponse(
        status_code=429,
        content={"success": False, "message": "Too many requests"},
        headers={"Retry-After": "60"},
    )


def _allowed_origins(config: Settings) -> list[str]:
    """Validate configured CORS origins.

    Raises:
        ValueError: On a wildcard origin, or missing origins in production
    """
    raw_origins = config.cors_origins_list

    # In production, CORS_ORIGINS must be explicitly configured
    if config.environment == "production" and not raw_origins:
        raise ValueError(
            "CORS_ORIGINS environment variable must be set in production. "
            "Example: CORS_ORIGINS=https://directory.example.com"
        )

    allowed_origins = []
    for origin in raw_origins:
        # Wildcards are incompatible with allow_credentials=True
        if origin == "*":
            raise ValueError(
                "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
                "Specify explicit origins."
            )
        if origin.startswith(("http://", "https://")):
            allowed_origins.append(origin)

    if not allowed_origins and config.environment != "production":
        allowed_origins = [DEFAULT_DEV_ORIGIN]

    return allowed_origins


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    logging.getLogger("directory_api").setLevel(config.log_level.upper())

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        description="Employee Directory API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors raised by services
    app.add_exception_handler(DirectoryAPIError, domain_exception_handler)

    # Sanitized error handlers to prevent information disclosure
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Middleware runs in reverse order of addition: CORS first on requests
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(config),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
    )

    # Include routers
    prefix = config.api_prefix.rstrip("/")
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Authentication"])
    app.include_router(employees.router, prefix=f"{prefix}/employees", tags=["Employees"])
    app.include_router(subscriptions.router, prefix=prefix, tags=["Subscriptions"])

    async def health_check() -> JSONResponse:
        """Health check endpoint, including storage reachability."""
        database_ok = await check_database()
        return JSONResponse(
            status_code=200 if database_ok else 503,
            content={
                "status": "ok" if database_ok else "degraded",
                "database": "ok" if database_ok else "unavailable",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    # Also served at the root, outside the API prefix
    app.add_api_route(f"{prefix}/health", health_check, methods=["GET"], tags=["Health"])
    if prefix:
        app.add_api_route("/health", health_check, methods=["GET"], include_in_schema=False)

    return app


app = create_app()
