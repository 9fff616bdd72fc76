"""Authentication DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from directory_api.models.dto.base import CamelModel


class RegisterRequest(CamelModel):
    """Account registration request."""

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class LoginRequest(CamelModel):
    """Email and password login request."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class RefreshTokenRequest(CamelModel):
    """Refresh request; the token may also arrive as a cookie."""

    refresh_token: str | None = None


class UserInfo(CamelModel):
    """Public user information."""

    id: UUID
    name: str
    email: str
    created_at: datetime


class AuthResponse(CamelModel):
    """Response for register and login."""

    success: bool = True
    token: str
    refresh_token: str
    expires_in: int
    user: UserInfo


class TokenResponse(CamelModel):
    """Response for token refresh."""

    success: bool = True
    token: str
    expires_in: int


class CurrentUserResponse(CamelModel):
    """Response for the current-user lookup."""

    success: bool = True
    data: UserInfo
