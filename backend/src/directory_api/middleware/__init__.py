"""Middleware package."""

from directory_api.middleware.error_handler import (
    domain_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from directory_api.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "SecurityHeadersMiddleware",
    "domain_exception_handler",
    "generic_exception_handler",
    "http_exception_handler",
    "sqlalchemy_exception_handler",
    "validation_exception_handler",
]
