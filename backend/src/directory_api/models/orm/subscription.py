"""Newsletter subscription ORM model."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from directory_api.models.orm.base import Base, UUIDMixin, utc_now


class SubscriptionORM(Base, UUIDMixin):
    """Newsletter subscription database model."""

    __tablename__ = "subscriptions"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
