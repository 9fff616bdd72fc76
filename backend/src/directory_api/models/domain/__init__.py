"""Domain models package."""

from directory_api.models.domain.employee import (
    EmployeeQuery,
    EmployeeSortField,
    EmployeeStatus,
    compute_resignation_year,
)
from directory_api.models.domain.user import Principal

__all__ = [
    "EmployeeQuery",
    "EmployeeSortField",
    "EmployeeStatus",
    "compute_resignation_year",
    "Principal",
]
