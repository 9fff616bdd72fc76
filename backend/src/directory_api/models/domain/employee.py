"""Employee domain model."""

from datetime import date
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict

# Age at which an employee is assumed to leave the workforce
RETIREMENT_AGE = 65

MIN_AGE = 18
MAX_AGE = 100

# Sentinel filter value meaning "do not filter on this field"
ALL_FILTER = "All"


class EmployeeStatus(StrEnum):
    """Employee status enum."""

    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class EmployeeSortField(StrEnum):
    """Fields an employee listing can be sorted by."""

    NAME = "name"
    AGE = "age"
    EMAIL = "email"
    POSITION = "position"
    DEPARTMENT = "department"
    HIRE_DATE = "hire_date"
    RESIGNATION_YEAR = "resignation_year"
    STATUS = "status"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


def compute_resignation_year(age: int, hire_date: date) -> int:
    """Project the year an employee reaches retirement age.

    Evaluated once when the record is created; the result is stored and
    never recomputed.

    Args:
        age: Employee age at hire
        hire_date: Date the employee was hired

    Returns:
        hire year + (RETIREMENT_AGE - age)
    """
    return hire_date.year + (RETIREMENT_AGE - age)


class EmployeeQuery(BaseModel):
    """Storage-independent filter and sort descriptor for employee listings.

    ``None`` for a filter means the filter is not applied.
    """

    model_config = ConfigDict(frozen=True)

    search_terms: tuple[str, ...] = ()
    status: EmployeeStatus | None = None
    department: str | None = None
    sort_by: EmployeeSortField = EmployeeSortField.CREATED_AT
    sort_order: Literal["asc", "desc"] = "desc"
    # Set when a filter names a value no record can have
    match_none: bool = False

    @property
    def is_unfiltered(self) -> bool:
        """Whether the descriptor matches every record."""
        return (
            not self.search_terms
            and self.status is None
            and self.department is None
            and not self.match_none
        )
