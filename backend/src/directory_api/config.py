"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Minimum entropy for secrets (measured by character diversity)
MIN_SECRET_UNIQUE_CHARS = 16


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Employee Directory API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Database (required - no default for security)
    database_url: str = Field(
        description="PostgreSQL (or SQLite for local development) connection URL."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Redis (optional, used as rate limiter storage)
    redis_url: str | None = None

    # Security - JWT
    jwt_secret: str = Field(min_length=32)
    jwt_algorithm: str = "HS256"
    jwt_expiration_hours: int = 24
    jwt_issuer: str = "directory-api"
    jwt_audience: str = "directory-app"

    # Security - Refresh Tokens
    refresh_token_days: int = 30

    # Security - Password Policy
    password_min_length: int = 8
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Employee records
    # Comma-separated list; empty means any non-empty department is accepted
    department_allow_list: str = ""

    # Cookie settings
    session_cookie_secure: bool = True
    session_cookie_httponly: bool = True
    session_cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    # CORS settings
    cors_origins: str = ""  # Comma-separated list

    # Trusted proxies for rate limiting (comma-separated IP/CIDR ranges)
    trusted_proxies: str = ""

    # Rate limiting settings (requests per minute)
    rate_limit_default: int = 100
    rate_limit_auth_login: int = 5
    rate_limit_auth_register: int = 5
    rate_limit_auth_refresh: int = 10
    rate_limit_mutation: int = 30
    rate_limit_enabled: bool = True

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for security requirements."""
        # Security: Prevent debug mode in production
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        url = self.database_url
        if not url.startswith(("postgresql://", "postgres://", "sqlite://", "sqlite+aiosqlite://")):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL (postgresql://) or a SQLite URL (sqlite://)"
            )

        if self.environment == "production":
            if url.startswith("sqlite"):
                raise ValueError("SQLite cannot be used in production. Configure PostgreSQL.")

            if len(set(self.jwt_secret)) < MIN_SECRET_UNIQUE_CHARS:
                raise ValueError(
                    f"JWT_SECRET must contain at least {MIN_SECRET_UNIQUE_CHARS} unique characters "
                    "for sufficient entropy. Use a cryptographically random value."
                )

        return self

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy.

        PostgreSQL URLs use asyncpg (sslmode is renamed to ssl for asyncpg),
        SQLite URLs use aiosqlite.
        """
        url = self.database_url
        if url.startswith("sqlite+aiosqlite://"):
            return url
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        url = url.replace("postgres://", "postgresql://", 1)
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url.replace("sslmode=", "ssl=")

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def trusted_proxies_list(self) -> list[str]:
        """Get trusted proxies as a list."""
        if not self.trusted_proxies:
            return []
        return [proxy.strip() for proxy in self.trusted_proxies.split(",") if proxy.strip()]

    @property
    def department_allow_list_values(self) -> set[str]:
        """Get the department allow-list as a set (empty means open set)."""
        return {d.strip() for d in self.department_allow_list.split(",") if d.strip()}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
