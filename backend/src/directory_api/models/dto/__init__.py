"""Data Transfer Objects package."""

from directory_api.models.dto.auth import AuthResponse, TokenResponse, UserInfo
from directory_api.models.dto.base import MessageResponse
from directory_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeStatsResponse,
    EmployeeUpdate,
)
from directory_api.models.dto.subscription import SubscriptionRequest, SubscriptionResponse

__all__ = [
    "AuthResponse",
    "TokenResponse",
    "UserInfo",
    "MessageResponse",
    "EmployeeCreate",
    "EmployeeResponse",
    "EmployeeStatsResponse",
    "EmployeeUpdate",
    "SubscriptionRequest",
    "SubscriptionResponse",
]
