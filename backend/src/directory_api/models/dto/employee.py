"""Employee DTOs."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from directory_api.models.domain.employee import EmployeeStatus
from directory_api.models.dto.base import CamelModel


class EmployeeResponse(CamelModel):
    """Employee response DTO."""

    id: UUID
    name: str
    age: int
    email: str
    position: str
    department: str
    hire_date: date
    resignation_year: int
    status: EmployeeStatus
    created_at: datetime
    updated_at: datetime


class EmployeeDetailResponse(CamelModel):
    """Envelope for a single employee lookup."""

    success: bool = True
    data: EmployeeResponse


class EmployeeMutationResponse(CamelModel):
    """Envelope returned by create and update."""

    success: bool = True
    message: str
    data: EmployeeResponse


class EmployeeCreate(CamelModel):
    """DTO for creating an employee.

    Fields are optional at the type level so that missing values are
    reported by the record validator together with every other violation.
    """

    name: str | None = Field(default=None, max_length=255, description="Full name")
    age: int | None = Field(default=None, description="Age in years (18-100)")
    email: str | None = Field(default=None, max_length=255, description="Email address")
    position: str | None = Field(default=None, max_length=255, description="Job title")
    department: str | None = Field(default=None, max_length=255, description="Department name")
    hire_date: date | None = Field(default=None, description="Hire date, defaults to today")

    def present_fields(self) -> dict[str, Any]:
        """Return the fields that carry a value, keyed by attribute name."""
        return self.model_dump(exclude_none=True)


class EmployeeUpdate(CamelModel):
    """DTO for partially updating an employee.

    ``resignationYear`` is not accepted: it is derived once at creation.
    """

    name: str | None = Field(default=None, max_length=255)
    age: int | None = None
    email: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)
    department: str | None = Field(default=None, max_length=255)
    hire_date: date | None = None
    status: EmployeeStatus | None = None

    def present_fields(self) -> dict[str, Any]:
        """Return the fields that carry a value, keyed by attribute name."""
        return self.model_dump(exclude_none=True)


class EmployeeStatsResponse(CamelModel):
    """Fleet-wide employee statistics."""

    total_employees: int = 0
    active_employees: int = 0
    department_count: int = 0
    avg_tenure_years: float = 0
    retention_rate: int = 0
