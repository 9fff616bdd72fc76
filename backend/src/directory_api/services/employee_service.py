"""Employee record lifecycle: listing, lookup, creation, update and deletion."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.config import get_settings
from directory_api.exceptions import DuplicateEmailError, EmployeeNotFoundError
from directory_api.models.domain.employee import (
    EmployeeQuery,
    EmployeeStatus,
    compute_resignation_year,
)
from directory_api.models.domain.user import Principal
from directory_api.models.dto.employee import EmployeeCreate, EmployeeUpdate
from directory_api.models.orm.base import utc_now
from directory_api.models.orm.employee import EmployeeORM
from directory_api.repositories.employee_repository import EmployeeRepository
from directory_api.services.employee_validator import EmployeeValidator
from directory_api.utils.errors import is_unique_violation, translate_storage_errors

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, session: AsyncSession, validator: EmployeeValidator | None = None) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.validator = validator or EmployeeValidator(
            department_allow_list=get_settings().department_allow_list_values
        )

    @translate_storage_errors("list_employees")
    async def list_employees(self, query: EmployeeQuery) -> list[EmployeeORM]:
        """List employees matching a query descriptor.

        Args:
            query: Filter and sort descriptor

        Returns:
            Matching employees, sorted as requested
        """
        return await self.employee_repo.find(query)

    @translate_storage_errors("list_departments")
    async def get_departments(self) -> list[str]:
        """Get all distinct departments.

        Returns:
            Sorted list of department names
        """
        return await self.employee_repo.get_all_departments()

    @translate_storage_errors("get_employee")
    async def get_employee(self, employee_id: UUID) -> EmployeeORM:
        """Get employee by ID.

        Raises:
            EmployeeNotFoundError: If no employee has this ID
        """
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(str(employee_id))
        return employee

    @translate_storage_errors("create_employee")
    async def create_employee(
        self,
        data: EmployeeCreate,
        user: Principal | None = None,
    ) -> EmployeeORM:
        """Create an employee.

        The record is validated, checked for a duplicate email, and given its
        resignation year before it is stored. New employees are always
        Active.

        Args:
            data: Employee creation data
            user: Principal creating the employee

        Returns:
            Created EmployeeORM

        Raises:
            RecordValidationError: If any field is missing or invalid
            DuplicateEmailError: If the email is already used
        """
        values = self.validator.validate_create(data.present_fields())

        if await self.employee_repo.email_exists(values["email"]):
            raise DuplicateEmailError(values["email"])

        try:
            employee = await self.employee_repo.create(
                name=values["name"],
                age=values["age"],
                email=values["email"],
                position=values["position"],
                department=values["department"],
                hire_date=values["hire_date"],
                resignation_year=compute_resignation_year(values["age"], values["hire_date"]),
                status=EmployeeStatus.ACTIVE.value,
            )
        except IntegrityError as e:
            # A concurrent insert won the race past the pre-check
            await self.session.rollback()
            if is_unique_violation(e, "email"):
                raise DuplicateEmailError(values["email"]) from e
            raise

        logger.info(
            "Employee created",
            extra={"employee_id": str(employee.id), "actor_id": str(user.id) if user else None},
        )
        return employee

    @translate_storage_errors("update_employee")
    async def update_employee(
        self,
        employee_id: UUID,
        data: EmployeeUpdate,
        user: Principal | None = None,
    ) -> EmployeeORM:
        """Apply a partial update to an employee.

        Only the fields present in ``data`` change. The resignation year is
        never recomputed.

        Args:
            employee_id: Employee UUID
            data: Fields to change
            user: Principal making the update

        Returns:
            Updated EmployeeORM

        Raises:
            EmployeeNotFoundError: If no employee has this ID
            RecordValidationError: If any present field is invalid
            DuplicateEmailError: If the new email belongs to another employee
        """
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(str(employee_id))

        values = self.validator.validate_update(data.present_fields())

        new_email = values.get("email")
        if new_email is not None and new_email != employee.email:
            if await self.employee_repo.email_exists(new_email, exclude_id=employee_id):
                raise DuplicateEmailError(new_email)

        if "status" in values:
            values["status"] = EmployeeStatus(values["status"]).value

        try:
            employee = await self.employee_repo.update(employee, updated_at=utc_now(), **values)
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e, "email"):
                raise DuplicateEmailError(new_email) from e
            raise

        logger.info(
            "Employee updated",
            extra={
                "employee_id": str(employee_id),
                "fields": sorted(values),
                "actor_id": str(user.id) if user else None,
            },
        )
        return employee

    @translate_storage_errors("delete_employee")
    async def delete_employee(self, employee_id: UUID, user: Principal | None = None) -> None:
        """Permanently delete an employee.

        Args:
            employee_id: Employee UUID
            user: Principal deleting the employee

        Raises:
            EmployeeNotFoundError: If no employee has this ID
        """
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(str(employee_id))

        await self.employee_repo.delete(employee)

        logger.info(
            "Employee deleted",
            extra={"employee_id": str(employee_id), "actor_id": str(user.id) if user else None},
        )
