"""Employees router - directory records, listing and statistics."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from directory_api.dependencies import get_employee_service, get_stats_service
from directory_api.exceptions import EmployeeNotFoundError
from directory_api.models.dto.base import MessageResponse
from directory_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeDetailResponse,
    EmployeeMutationResponse,
    EmployeeResponse,
    EmployeeStatsResponse,
    EmployeeUpdate,
)
from directory_api.security.auth import CurrentPrincipal
from directory_api.security.rate_limit import MUTATION_LIMIT, limiter
from directory_api.services.employee_service import EmployeeService
from directory_api.services.query_builder import build_employee_query
from directory_api.services.stats_service import EmployeeStatsService

logger = logging.getLogger(__name__)
router = APIRouter()


def parse_employee_id(employee_id: str) -> UUID:
    """Parse a path id; anything that is not a UUID cannot name an employee."""
    try:
        return UUID(employee_id)
    except ValueError:
        raise EmployeeNotFoundError(employee_id) from None


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    search: str | None = Query(default=None, max_length=200),
    status: str | None = Query(default=None, max_length=50),
    department: str | None = Query(default=None, max_length=255),
    sort_by: str | None = Query(default=None, alias="sortBy", max_length=50),
    sort_order: str | None = Query(default=None, alias="sortOrder", max_length=10),
) -> list[EmployeeResponse]:
    """List employees with optional search, filters and sorting."""
    query = build_employee_query(
        search=search,
        status=status,
        department=department,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    employees = await employee_service.list_employees(query)
    return [EmployeeResponse.model_validate(emp) for emp in employees]


@router.get("/stats", response_model=EmployeeStatsResponse)
async def get_stats(
    stats_service: Annotated[EmployeeStatsService, Depends(get_stats_service)],
) -> EmployeeStatsResponse:
    """Get totals, department count, average tenure and retention rate."""
    return await stats_service.get_stats()


@router.get("/departments", response_model=list[str])
async def list_departments(
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> list[str]:
    """Get all unique departments."""
    return await employee_service.get_departments()


@router.get("/{employee_id}", response_model=EmployeeDetailResponse)
async def get_employee(
    employee_id: str,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeDetailResponse:
    """Get a single employee by ID."""
    employee = await employee_service.get_employee(parse_employee_id(employee_id))
    return EmployeeDetailResponse(data=EmployeeResponse.model_validate(employee))


@router.post("", response_model=EmployeeMutationResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(MUTATION_LIMIT)
async def create_employee(
    request: Request,
    body: EmployeeCreate,
    current_user: CurrentPrincipal,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeMutationResponse:
    """Create an employee. The resignation year is derived from age and hire date."""
    employee = await employee_service.create_employee(body, user=current_user)
    return EmployeeMutationResponse(
        message="Employee added successfully",
        data=EmployeeResponse.model_validate(employee),
    )


@router.put("/{employee_id}", response_model=EmployeeMutationResponse)
@limiter.limit(MUTATION_LIMIT)
async def update_employee(
    request: Request,
    employee_id: str,
    body: EmployeeUpdate,
    current_user: CurrentPrincipal,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeMutationResponse:
    """Update the fields present in the body. The resignation year never changes."""
    employee = await employee_service.update_employee(
        parse_employee_id(employee_id), body, user=current_user
    )
    return EmployeeMutationResponse(
        message="Employee updated successfully",
        data=EmployeeResponse.model_validate(employee),
    )


@router.delete("/{employee_id}", response_model=MessageResponse)
@limiter.limit(MUTATION_LIMIT)
async def delete_employee(
    request: Request,
    employee_id: str,
    current_user: CurrentPrincipal,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> MessageResponse:
    """Permanently delete an employee."""
    await employee_service.delete_employee(parse_employee_id(employee_id), user=current_user)
    return MessageResponse(message="Employee deleted successfully")
