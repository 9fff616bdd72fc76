"""User ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from directory_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class UserORM(Base, UUIDMixin, TimestampMixin):
    """Application user with local password authentication."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
