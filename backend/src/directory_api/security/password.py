"""Password hashing and validation utilities."""

import bcrypt

from directory_api.config import get_settings


class PasswordService:
    """Service for password hashing and validation."""

    # bcrypt ignores everything past 72 bytes
    MAX_PASSWORD_BYTES = 72

    def __init__(self, min_length: int | None = None, rounds: int | None = None) -> None:
        """Initialize with optional overrides of the configured policy."""
        settings = get_settings()
        self.min_length = min_length if min_length is not None else settings.password_min_length
        self.rounds = rounds if rounds is not None else settings.bcrypt_rounds

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password
            hashed: Hashed password

        Returns:
            True if password matches
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, UnicodeDecodeError, UnicodeEncodeError):
            # Invalid hash format or encoding issues
            return False

    def validate_password_strength(self, password: str) -> tuple[bool, list[str]]:
        """Validate password against the configured policy.

        Args:
            password: Password to validate

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = []

        if len(password) < self.min_length:
            errors.append(f"Password must be at least {self.min_length} characters")

        if len(password.encode("utf-8")) > self.MAX_PASSWORD_BYTES:
            errors.append(f"Password must be at most {self.MAX_PASSWORD_BYTES} bytes")

        if not password.strip():
            errors.append("Password cannot be blank")

        return len(errors) == 0, errors


_password_service: PasswordService | None = None


def get_password_service() -> PasswordService:
    """Get the password service singleton.

    Returns:
        PasswordService instance
    """
    global _password_service
    if _password_service is None:
        _password_service = PasswordService()
    return _password_service
