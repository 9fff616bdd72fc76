"""Listing parameter translation tests."""

import pytest

from directory_api.models.domain.employee import EmployeeSortField, EmployeeStatus
from directory_api.services.query_builder import build_employee_query


class TestBuildEmployeeQuery:
    """Raw listing parameters to EmployeeQuery."""

    def test_defaults(self) -> None:
        query = build_employee_query()

        assert query.is_unfiltered
        assert query.sort_by == EmployeeSortField.CREATED_AT
        assert query.sort_order == "desc"

    @pytest.mark.parametrize("value", [None, "", "   ", "All", "all", "ALL"])
    def test_empty_and_all_filters_are_ignored(self, value) -> None:
        query = build_employee_query(status=value, department=value)

        assert query.status is None
        assert query.department is None

    def test_status_filter(self) -> None:
        assert build_employee_query(status="On Leave").status == EmployeeStatus.ON_LEAVE

    def test_status_filter_is_case_insensitive(self) -> None:
        assert build_employee_query(status="active").status == EmployeeStatus.ACTIVE

    def test_unknown_status_matches_nothing(self) -> None:
        query = build_employee_query(status="Retired")

        assert query.status is None
        assert query.match_none
        assert not query.is_unfiltered

    @pytest.mark.parametrize("value", [None, "", "All"])
    def test_empty_status_matches_everything(self, value) -> None:
        assert not build_employee_query(status=value).match_none

    def test_department_filter(self) -> None:
        assert build_employee_query(department=" Sales ").department == "Sales"

    @pytest.mark.parametrize("department", ["C++ Platform", "Sales: EMEA", "R&D #2 @HQ!"])
    def test_department_filter_kept_verbatim(self, department: str) -> None:
        assert build_employee_query(department=department).department == department

    def test_search_is_split_into_terms(self) -> None:
        query = build_employee_query(search="  alice   engineering ")
        assert query.search_terms == ("alice", "engineering")

    def test_search_terms_deduplicated(self) -> None:
        assert build_employee_query(search="Bob bob BOB").search_terms == ("Bob",)

    @pytest.mark.parametrize(
        ("sort_by", "expected"),
        [
            ("name", EmployeeSortField.NAME),
            ("hireDate", EmployeeSortField.HIRE_DATE),
            ("hire_date", EmployeeSortField.HIRE_DATE),
            ("resignationYear", EmployeeSortField.RESIGNATION_YEAR),
            ("createdAt", EmployeeSortField.CREATED_AT),
        ],
    )
    def test_sort_keys(self, sort_by: str, expected: EmployeeSortField) -> None:
        assert build_employee_query(sort_by=sort_by).sort_by == expected

    def test_unknown_sort_key_falls_back(self) -> None:
        assert build_employee_query(sort_by="salary").sort_by == EmployeeSortField.CREATED_AT

    @pytest.mark.parametrize(
        ("sort_order", "expected"),
        [("asc", "asc"), ("ASC", "asc"), ("desc", "desc"), ("sideways", "desc"), (None, "desc")],
    )
    def test_sort_order(self, sort_order, expected: str) -> None:
        assert build_employee_query(sort_order=sort_order).sort_order == expected
