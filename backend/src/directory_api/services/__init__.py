"""Services package."""

from directory_api.services.auth_service import AuthService
from directory_api.services.employee_service import EmployeeService
from directory_api.services.employee_validator import EmployeeValidator
from directory_api.services.stats_service import EmployeeStatsService
from directory_api.services.subscription_service import SubscriptionService

__all__ = [
    "AuthService",
    "EmployeeService",
    "EmployeeStatsService",
    "EmployeeValidator",
    "SubscriptionService",
]
