"""Statistics aggregator tests."""

from datetime import date, datetime, timezone

import pytest

from directory_api.repositories.employee_repository import EmployeeAggregate
from directory_api.services.stats_service import EmployeeStatsService, round_half_up, summarize

# 2024-01-01T00:00:00Z is day 19723 after the epoch
NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)
NOW_DAY = 19723


class TestRoundHalfUp:
    """Halves round away from zero for positive values."""

    @pytest.mark.parametrize(
        ("value", "digits", "expected"),
        [(2.5, 0, 3), (12.5, 0, 13), (0.49, 0, 0), (0.25, 1, 0.3), (2.04, 1, 2.0)],
    )
    def test_rounding(self, value: float, digits: int, expected: float) -> None:
        assert round_half_up(value, digits) == expected


class TestSummarize:
    """Aggregate to published statistics."""

    def test_empty_store_is_all_zeros(self) -> None:
        stats = summarize(EmployeeAggregate(total=0, active=0, departments=0, avg_hire_day=None), NOW)

        assert stats.total_employees == 0
        assert stats.active_employees == 0
        assert stats.department_count == 0
        assert stats.avg_tenure_years == 0
        assert stats.retention_rate == 0

    def test_tenure_in_365_day_years(self) -> None:
        aggregate = EmployeeAggregate(total=2, active=2, departments=1, avg_hire_day=NOW_DAY - 730)
        assert summarize(aggregate, NOW).avg_tenure_years == 2.0

    def test_retention_rate_rounds_half_up(self) -> None:
        aggregate = EmployeeAggregate(total=8, active=1, departments=1, avg_hire_day=NOW_DAY)
        assert summarize(aggregate, NOW).retention_rate == 13

    def test_retention_rate_rounds_to_nearest(self) -> None:
        aggregate = EmployeeAggregate(total=3, active=2, departments=1, avg_hire_day=NOW_DAY)
        assert summarize(aggregate, NOW).retention_rate == 67

    def test_serialized_field_names(self) -> None:
        aggregate = EmployeeAggregate(total=1, active=1, departments=1, avg_hire_day=NOW_DAY)
        body = summarize(aggregate, NOW).model_dump(by_alias=True)

        assert set(body) == {
            "totalEmployees",
            "activeEmployees",
            "departmentCount",
            "avgTenureYears",
            "retentionRate",
        }


class TestEmployeeStatsService:
    """Statistics computed by the database."""

    async def test_aggregate_query(self, db_session) -> None:
        from directory_api.repositories.employee_repository import EmployeeRepository

        repo = EmployeeRepository(db_session)
        for i, (department, status, hire_date) in enumerate(
            [
                ("Engineering", "Active", date(2022, 1, 1)),
                ("Engineering", "Active", date(2022, 1, 1)),
                ("Sales", "Terminated", date(2022, 1, 1)),
            ]
        ):
            await repo.create(
                name=f"Employee {i}",
                age=30,
                email=f"employee{i}@acme.com",
                position="Staff",
                department=department,
                hire_date=hire_date,
                resignation_year=2057,
                status=status,
            )

        service = EmployeeStatsService(db_session, clock=lambda: NOW)
        stats = await service.get_stats()

        assert stats.total_employees == 3
        assert stats.active_employees == 2
        assert stats.department_count == 2
        assert stats.retention_rate == 67
        # 2022-01-01 to 2024-01-01 is 730 days
        assert stats.avg_tenure_years == 2.0

    async def test_empty_store(self, db_session) -> None:
        stats = await EmployeeStatsService(db_session, clock=lambda: NOW).get_stats()
        assert stats.total_employees == 0
        assert stats.retention_rate == 0
