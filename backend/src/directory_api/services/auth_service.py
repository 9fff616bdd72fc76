"""Authentication service."""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.config import get_settings
from directory_api.exceptions import (
    InvalidCredentialsError,
    UnauthenticatedError,
    UserAlreadyExistsError,
    WeakPasswordError,
)
from directory_api.models.dto.auth import UserInfo
from directory_api.models.orm.user import UserORM
from directory_api.repositories.user_repository import UserRepository
from directory_api.security.auth import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from directory_api.security.password import get_password_service
from directory_api.utils.errors import is_unique_violation, translate_storage_errors
from directory_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """Outcome of a successful register or login."""

    user: UserInfo
    access_token: str
    refresh_token: str
    expires_in: int


def access_token_lifetime_seconds() -> int:
    """Access token lifetime in seconds."""
    return get_settings().jwt_expiration_hours * 3600


class AuthService:
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.password_service = get_password_service()

    def _issue_tokens(self, user: UserORM) -> AuthResult:
        return AuthResult(
            user=UserInfo.model_validate(user),
            access_token=create_access_token(user.id, user.email),
            refresh_token=create_refresh_token(user.id, user.email),
            expires_in=access_token_lifetime_seconds(),
        )

    @translate_storage_errors("register")
    async def register(
        self,
        name: str,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResult:
        """Create an account and sign it in.

        Args:
            name: Display name
            email: Account email
            password: Plain text password
            ip_address: Client IP address
            user_agent: Client user agent

        Returns:
            AuthResult with the new user and tokens

        Raises:
            WeakPasswordError: If the password fails the policy
            UserAlreadyExistsError: If the email already has an account
        """
        email = email.strip().lower()

        is_valid, errors = self.password_service.validate_password_strength(password)
        if not is_valid:
            raise WeakPasswordError(errors)

        if await self.user_repo.get_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        try:
            user = await self.user_repo.create(
                name=name.strip(),
                email=email,
                password_hash=self.password_service.hash_password(password),
            )
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e, "email"):
                raise UserAlreadyExistsError(email) from e
            raise

        log_security_event(
            SecurityEventType.USER_CREATED,
            user_id=user.id,
            user_email=email,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return self._issue_tokens(user)

    @translate_storage_errors("login")
    async def login(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AuthResult:
        """Authenticate with email and password.

        Unknown emails and wrong passwords fail the same way.

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        email = email.strip().lower()
        user = await self.user_repo.get_by_email(email)

        if user is None or not self.password_service.verify_password(password, user.password_hash):
            log_security_event(
                SecurityEventType.LOGIN_FAILED,
                user_id=user.id if user else None,
                user_email=email,
                ip_address=ip_address,
                user_agent=user_agent,
                success=False,
            )
            raise InvalidCredentialsError()

        log_security_event(
            SecurityEventType.LOGIN_SUCCESS,
            user_id=user.id,
            user_email=email,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return self._issue_tokens(user)

    @translate_storage_errors("current_user")
    async def get_current_user(self, user_id: UUID) -> UserInfo:
        """Get the account behind an authenticated principal.

        Raises:
            UnauthenticatedError: If the account no longer exists
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UnauthenticatedError("User no longer exists")
        return UserInfo.model_validate(user)

    @translate_storage_errors("refresh_token")
    async def refresh(self, refresh_token: str | None, ip_address: str | None = None) -> tuple[str, int]:
        """Exchange a refresh token for a new access token.

        Args:
            refresh_token: JWT refresh token
            ip_address: Client IP address

        Returns:
            Tuple of (access token, lifetime in seconds)

        Raises:
            UnauthenticatedError: If the token is missing, invalid or its user is gone
        """
        if not refresh_token:
            raise UnauthenticatedError("Refresh token required")

        try:
            payload = decode_token(refresh_token, "refresh")
            user_id = UUID(payload["sub"])
        except (UnauthenticatedError, KeyError, ValueError) as e:
            log_security_event(
                SecurityEventType.TOKEN_REJECTED,
                ip_address=ip_address,
                success=False,
            )
            raise UnauthenticatedError("Invalid or expired token") from e

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UnauthenticatedError("Invalid or expired token")

        log_security_event(
            SecurityEventType.TOKEN_REFRESH,
            user_id=user.id,
            user_email=user.email,
            ip_address=ip_address,
        )
        return create_access_token(user.id, user.email), access_token_lifetime_seconds()
