"""User repository."""

from sqlalchemy import select

from directory_api.models.orm.user import UserORM
from directory_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserORM]):
    """Repository for user operations."""

    model = UserORM

    async def get_by_email(self, email: str) -> UserORM | None:
        """Get user by email.

        Args:
            email: Lowercased email address

        Returns:
            UserORM or None if not found
        """
        result = await self.session.execute(
            select(UserORM).where(UserORM.email == email)
        )
        return result.scalar_one_or_none()
