"""Newsletter subscription repository."""

from sqlalchemy import select

from directory_api.models.orm.subscription import SubscriptionORM
from directory_api.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[SubscriptionORM]):
    """Repository for subscription operations."""

    model = SubscriptionORM

    async def get_by_email(self, email: str) -> SubscriptionORM | None:
        """Get subscription by email."""
        result = await self.session.execute(
            select(SubscriptionORM).where(SubscriptionORM.email == email)
        )
        return result.scalar_one_or_none()
