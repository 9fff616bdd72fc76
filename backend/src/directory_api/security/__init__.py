"""Security package."""

from directory_api.security.auth import (
    CurrentPrincipal,
    create_access_token,
    create_refresh_token,
    get_current_principal,
)
from directory_api.security.password import PasswordService, get_password_service

__all__ = [
    "CurrentPrincipal",
    "PasswordService",
    "create_access_token",
    "create_refresh_token",
    "get_current_principal",
    "get_password_service",
]
