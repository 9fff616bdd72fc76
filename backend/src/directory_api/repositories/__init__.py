"""Repositories package."""

from directory_api.repositories.base import BaseRepository
from directory_api.repositories.employee_repository import EmployeeRepository
from directory_api.repositories.subscription_repository import SubscriptionRepository
from directory_api.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "EmployeeRepository",
    "SubscriptionRepository",
    "UserRepository",
]
