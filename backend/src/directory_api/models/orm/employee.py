"""Employee ORM model."""

from datetime import date

from sqlalchemy import Date, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from directory_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class EmployeeORM(Base, UUIDMixin, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    department: Mapped[str] = mapped_column(String(255), nullable=False)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    # Derived once at creation, never written again
    resignation_year: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="Active")

    __table_args__ = (
        Index("idx_employees_status", "status"),
        Index("idx_employees_department", "department"),
        Index("idx_employees_created_at", "created_at"),
    )
