"""Authentication router."""

from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Header, Request, Response, status

from directory_api.config import get_settings
from directory_api.dependencies import get_auth_service
from directory_api.models.dto.auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
)
from directory_api.models.dto.base import MessageResponse
from directory_api.security.auth import (
    ACCESS_COOKIE_NAME,
    REFRESH_COOKIE_NAME,
    CurrentPrincipal,
)
from directory_api.security.rate_limit import (
    AUTH_LOGIN_LIMIT,
    AUTH_REFRESH_LIMIT,
    AUTH_REGISTER_LIMIT,
    get_real_client_ip,
    limiter,
)
from directory_api.services.auth_service import AuthResult, AuthService
from directory_api.utils.security_events import SecurityEventType, log_security_event

router = APIRouter()


def _cookie_secure() -> bool:
    settings = get_settings()
    if settings.environment == "development":
        return False
    return settings.session_cookie_secure


def _set_auth_cookies(
    response: Response, access_token: str, refresh_token: str | None = None
) -> None:
    """Set authentication cookies on response."""
    settings = get_settings()
    is_secure = _cookie_secure()

    response.set_cookie(
        key=ACCESS_COOKIE_NAME,
        value=access_token,
        httponly=settings.session_cookie_httponly,
        secure=is_secure,
        samesite=settings.session_cookie_samesite,
        max_age=settings.jwt_expiration_hours * 3600,
        path="/",
    )

    if refresh_token:
        response.set_cookie(
            key=REFRESH_COOKIE_NAME,
            value=refresh_token,
            httponly=settings.session_cookie_httponly,
            secure=is_secure,
            samesite=settings.session_cookie_samesite,
            max_age=settings.refresh_token_days * 24 * 3600,
            path="/",
        )


def _clear_auth_cookies(response: Response) -> None:
    """Clear authentication cookies."""
    settings = get_settings()
    is_secure = _cookie_secure()
    for key in (ACCESS_COOKIE_NAME, REFRESH_COOKIE_NAME):
        response.delete_cookie(
            key=key,
            path="/",
            secure=is_secure,
            samesite=settings.session_cookie_samesite,
            httponly=settings.session_cookie_httponly,
        )


def _auth_response(response: Response, result: AuthResult) -> AuthResponse:
    _set_auth_cookies(response, result.access_token, result.refresh_token)
    return AuthResponse(
        token=result.access_token,
        refresh_token=result.refresh_token,
        expires_in=result.expires_in,
        user=result.user,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_REGISTER_LIMIT)
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    user_agent: str | None = Header(default=None),
) -> AuthResponse:
    """Create an account and sign it in."""
    result = await auth_service.register(
        name=body.name,
        email=body.email,
        password=body.password,
        ip_address=get_real_client_ip(request),
        user_agent=user_agent,
    )
    return _auth_response(response, result)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(AUTH_LOGIN_LIMIT)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    user_agent: str | None = Header(default=None),
) -> AuthResponse:
    """Authenticate with email and password."""
    result = await auth_service.login(
        email=body.email,
        password=body.password,
        ip_address=get_real_client_ip(request),
        user_agent=user_agent,
    )
    return _auth_response(response, result)


@router.post("/refresh-token", response_model=TokenResponse)
@limiter.limit(AUTH_REFRESH_LIMIT)
async def refresh_token(
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    body: RefreshTokenRequest | None = None,
    refresh_token_cookie: Annotated[str | None, Cookie(alias=REFRESH_COOKIE_NAME)] = None,
) -> TokenResponse:
    """Issue a new access token from a refresh token (body or cookie)."""
    token = body.refresh_token if body and body.refresh_token else refresh_token_cookie

    access_token, expires_in = await auth_service.refresh(
        token, ip_address=get_real_client_ip(request)
    )
    _set_auth_cookies(response, access_token)

    return TokenResponse(token=access_token, expires_in=expires_in)


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(
    current_user: CurrentPrincipal,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> CurrentUserResponse:
    """Get the signed-in user."""
    return CurrentUserResponse(data=await auth_service.get_current_user(current_user.id))


@router.get("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response) -> MessageResponse:
    """Sign out by clearing the auth cookies. Tokens are stateless."""
    _clear_auth_cookies(response)
    log_security_event(SecurityEventType.LOGOUT, ip_address=get_real_client_ip(request))
    return MessageResponse(message="Logged out successfully")
