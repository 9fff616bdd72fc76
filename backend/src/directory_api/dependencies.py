"""Centralized dependency injection factories for FastAPI.

This module provides reusable service factory functions for dependency injection,
eliminating duplicate definitions across routers.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.config import get_settings
from directory_api.database import get_db
from directory_api.services.auth_service import AuthService
from directory_api.services.employee_service import EmployeeService
from directory_api.services.employee_validator import EmployeeValidator
from directory_api.services.stats_service import EmployeeStatsService
from directory_api.services.subscription_service import SubscriptionService


def get_employee_validator() -> EmployeeValidator:
    """Get EmployeeValidator configured with the department allow-list."""
    return EmployeeValidator(department_allow_list=get_settings().department_allow_list_values)


def get_employee_service(
    db: AsyncSession = Depends(get_db),
    validator: EmployeeValidator = Depends(get_employee_validator),
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db, validator)


def get_stats_service(db: AsyncSession = Depends(get_db)) -> EmployeeStatsService:
    """Get EmployeeStatsService instance."""
    return EmployeeStatsService(db)


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db)


def get_subscription_service(db: AsyncSession = Depends(get_db)) -> SubscriptionService:
    """Get SubscriptionService instance."""
    return SubscriptionService(db)
