"""Domain-specific exceptions for the directory API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers. The status code
each one maps to lives in ``middleware.error_handler``.
"""

from typing import Any


class DirectoryAPIError(Exception):
    """Base exception for all directory API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(DirectoryAPIError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: str | None = None) -> None:
        details = {"employee_id": str(employee_id)} if employee_id else {}
        super().__init__("Employee not found", details)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(DirectoryAPIError):
    """Base class for validation errors."""

    pass


class RecordValidationError(ValidationError):
    """Raised when an employee record violates one or more field constraints.

    Carries one message per violated field so callers can surface all of
    them at once.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("Validation error", {"errors": errors})

    @property
    def messages(self) -> list[str]:
        """Violation messages in field order."""
        return list(self.errors.values())


class DuplicateEmailError(ValidationError):
    """Raised when an employee email is already used by another record."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("An employee with this email already exists", details)


class UserAlreadyExistsError(ValidationError):
    """Raised when registering with an email that already has an account."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Email already registered", details)


class WeakPasswordError(ValidationError):
    """Raised when a password does not meet the password policy."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("Password does not meet requirements", {"errors": errors})


# =============================================================================
# Authentication Errors (401)
# =============================================================================


class AuthenticationError(DirectoryAPIError):
    """Base class for authentication errors."""

    pass


class UnauthenticatedError(AuthenticationError):
    """Raised when a request carries no valid credentials."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials do not match an account."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


# =============================================================================
# Storage Errors (500)
# =============================================================================


class StorageUnavailableError(DirectoryAPIError):
    """Raised when the backing store cannot serve a request."""

    def __init__(self, operation: str | None = None) -> None:
        details = {"operation": operation} if operation else {}
        super().__init__("Storage unavailable", details)
