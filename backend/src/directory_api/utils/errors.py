"""Helpers for turning storage-driver failures into domain errors."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from directory_api.exceptions import StorageUnavailableError
from directory_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# Failures that mean the store could not be reached or did not answer
TRANSIENT_STORAGE_ERRORS = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
    ConnectionError,
    TimeoutError,
)


def is_unique_violation(exc: IntegrityError, column: str | None = None) -> bool:
    """Check whether an integrity error is a unique constraint violation.

    Args:
        exc: Integrity error raised by the driver
        column: Optional column name that must appear in the message

    Returns:
        True if the error reports a duplicate value
    """
    message = str(exc.orig if exc.orig is not None else exc).lower()
    if "unique" not in message and "duplicate" not in message:
        return False
    return column is None or column.lower() in message


def translate_storage_errors(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorate an async service method so transient storage failures
    surface as StorageUnavailableError.

    Args:
        operation: Name used in logs and error details

    Returns:
        Decorator
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except TRANSIENT_STORAGE_ERRORS as e:
                log_error(logger, f"Storage failure during {operation}", e)
                raise StorageUnavailableError(operation) from e

        return wrapper

    return decorator
