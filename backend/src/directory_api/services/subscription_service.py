"""Newsletter subscription service."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.models.orm.subscription import SubscriptionORM
from directory_api.repositories.subscription_repository import SubscriptionRepository
from directory_api.utils.errors import is_unique_violation, translate_storage_errors

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Service for newsletter subscriptions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.subscription_repo = SubscriptionRepository(session)

    @translate_storage_errors("subscribe")
    async def subscribe(self, email: str) -> tuple[bool, SubscriptionORM]:
        """Subscribe an email address; subscribing twice is not an error.

        Args:
            email: Address to subscribe

        Returns:
            Tuple of (created, subscription)
        """
        email = email.strip().lower()

        existing = await self.subscription_repo.get_by_email(email)
        if existing is not None:
            return False, existing

        try:
            subscription = await self.subscription_repo.create(email=email)
        except IntegrityError as e:
            await self.session.rollback()
            if not is_unique_violation(e, "email"):
                raise
            existing = await self.subscription_repo.get_by_email(email)
            if existing is None:
                raise
            return False, existing

        logger.info("New newsletter subscription", extra={"subscription_id": str(subscription.id)})
        return True, subscription
