"""Fleet-wide employee statistics."""

import math
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.models.dto.employee import EmployeeStatsResponse
from directory_api.repositories.employee_repository import EmployeeAggregate, EmployeeRepository
from directory_api.utils.errors import translate_storage_errors

SECONDS_PER_DAY = 86400
DAYS_PER_YEAR = 365


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, as dashboards expect (2.5 -> 3)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def summarize(aggregate: EmployeeAggregate, now: datetime) -> EmployeeStatsResponse:
    """Turn a raw aggregate into the published statistics.

    Args:
        aggregate: Counts and mean hire day from the database
        now: Reference time for tenure

    Returns:
        EmployeeStatsResponse; all zeros when there are no employees
    """
    if aggregate.total == 0:
        return EmployeeStatsResponse()

    avg_tenure_years = 0.0
    if aggregate.avg_hire_day is not None:
        now_day = now.timestamp() / SECONDS_PER_DAY
        avg_tenure_years = round_half_up((now_day - aggregate.avg_hire_day) / DAYS_PER_YEAR, 1)

    return EmployeeStatsResponse(
        total_employees=aggregate.total,
        active_employees=aggregate.active,
        department_count=aggregate.departments,
        avg_tenure_years=avg_tenure_years,
        retention_rate=int(round_half_up(aggregate.active / aggregate.total * 100)),
    )


class EmployeeStatsService:
    """Service computing statistics over every employee."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.clock = clock

    @translate_storage_errors("employee_stats")
    async def get_stats(self) -> EmployeeStatsResponse:
        """Compute totals, department count, average tenure and retention rate.

        Returns:
            EmployeeStatsResponse
        """
        aggregate = await self.employee_repo.aggregate()
        return summarize(aggregate, self.clock())
