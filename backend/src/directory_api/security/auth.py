"""Token issuance and request authentication."""

from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Literal
from uuid import UUID

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from directory_api.config import get_settings
from directory_api.exceptions import UnauthenticatedError
from directory_api.models.domain.user import Principal

TokenType = Literal["access", "refresh"]

ACCESS_COOKIE_NAME = "token"
REFRESH_COOKIE_NAME = "refresh_token"

bearer_scheme = HTTPBearer(auto_error=False)


def _create_token(user_id: UUID, email: str, token_type: TokenType, lifetime: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "type": token_type,
        "iat": now,
        "exp": now + lifetime,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: UUID, email: str) -> str:
    """Create a short-lived JWT access token.

    Args:
        user_id: User UUID
        email: User email

    Returns:
        JWT token string
    """
    settings = get_settings()
    return _create_token(user_id, email, "access", timedelta(hours=settings.jwt_expiration_hours))


def create_refresh_token(user_id: UUID, email: str) -> str:
    """Create a long-lived JWT refresh token.

    Args:
        user_id: User UUID
        email: User email

    Returns:
        JWT token string
    """
    settings = get_settings()
    return _create_token(user_id, email, "refresh", timedelta(days=settings.refresh_token_days))


def decode_token(token: str, expected_type: TokenType = "access") -> dict[str, Any]:
    """Decode and verify a JWT token.

    Args:
        token: JWT token string
        expected_type: Token type the caller accepts

    Returns:
        Token payload

    Raises:
        UnauthenticatedError: If token is invalid, expired or of the wrong type
    """
    settings = get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except JWTError as e:
        raise UnauthenticatedError("Invalid or expired token") from e

    if payload.get("type") != expected_type:
        raise UnauthenticatedError("Invalid token type")

    return payload


def principal_from_token(token: str) -> Principal:
    """Build the request principal from an access token.

    Args:
        token: JWT access token

    Returns:
        Principal

    Raises:
        UnauthenticatedError: If the token is invalid
    """
    payload = decode_token(token, "access")
    try:
        return Principal(id=UUID(payload["sub"]), email=payload["email"])
    except (KeyError, ValueError) as e:
        raise UnauthenticatedError("Invalid or expired token") from e


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token_cookie: Annotated[str | None, Cookie(alias=ACCESS_COOKIE_NAME)] = None,
) -> Principal:
    """Get the authenticated principal for the current request.

    The bearer header takes precedence over the token cookie.

    Raises:
        UnauthenticatedError: If no valid token is presented
    """
    token = credentials.credentials if credentials is not None else token_cookie
    if not token:
        raise UnauthenticatedError()
    return principal_from_token(token)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
