"""Newsletter subscription DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr

from directory_api.models.dto.base import CamelModel


class SubscriptionRequest(CamelModel):
    """Subscribe request."""

    email: EmailStr


class SubscriptionInfo(CamelModel):
    """Stored subscription."""

    id: UUID
    email: str
    created_at: datetime


class SubscriptionResponse(CamelModel):
    """Subscribe response; ``data`` is only set for new subscriptions."""

    success: bool = True
    message: str
    data: SubscriptionInfo | None = None
