"""SQLAlchemy ORM models package."""

from directory_api.models.orm.base import Base
from directory_api.models.orm.employee import EmployeeORM
from directory_api.models.orm.subscription import SubscriptionORM
from directory_api.models.orm.user import UserORM

__all__ = [
    "Base",
    "EmployeeORM",
    "SubscriptionORM",
    "UserORM",
]
