"""SQL injection and hostile input tests for listing parameters.

SQLAlchemy parameterizes every query, which is the primary protection.
Sanitizers and whitelists on search, department, status and sort inputs
are a second layer; these tests cover both.
"""

import pytest
from httpx import AsyncClient

from conftest import API, employee_payload

SQL_INJECTION_PAYLOADS = [
    # Classic SQL injection
    "'; DROP TABLE employees; --",
    "1' OR '1'='1",
    "' UNION SELECT * FROM users --",
    "1' AND 1=1 --",
    # Boolean-based blind injection
    "1' AND (SELECT COUNT(*) FROM users) > 0 --",
    # Time-based blind injection
    "1'; SELECT pg_sleep(5) --",
    "1' AND SLEEP(5) --",
    # Stacked queries
    "1'; UPDATE employees SET status = 'Terminated'; --",
    # Encoding variations
    "%27%20OR%201%3D1%20--",
    # Unicode bypass attempts
    "ʼ OR 1=1 --",
    # Comment variations
    "1'/**/OR/**/1=1--",
    "1'#",
    # PostgreSQL specific
    "$$; DROP TABLE employees; $$",
    # NULL byte injection
    "1'\x00 OR 1=1 --",
]

# NUL bytes are not representable in a query string
ENDPOINT_PAYLOADS = [p for p in SQL_INJECTION_PAYLOADS if "\x00" not in p]

XSS_PAYLOADS = [
    "<script>alert('XSS')</script>",
    "<img src=x onerror=alert('XSS')>",
    "<svg onload=alert('XSS')>",
]


class TestSanitizers:
    """Defense-in-depth sanitization of listing parameters."""

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_search_parameter_kept_literal(self, payload: str) -> None:
        from directory_api.utils.validation import sanitize_search

        assert sanitize_search(payload) == payload.strip()

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_sort_column_whitelist_rejects_injection(self, payload: str) -> None:
        from directory_api.services.query_builder import SORT_KEYS
        from directory_api.utils.validation import validate_sort_by

        result = validate_sort_by(payload, SORT_KEYS, "created_at")

        assert result == "created_at"

    @pytest.mark.parametrize("payload", SQL_INJECTION_PAYLOADS)
    def test_status_filter_whitelist_rejects_injection(self, payload: str) -> None:
        from directory_api.services.query_builder import ALLOWED_STATUSES
        from directory_api.utils.validation import sanitize_status

        assert sanitize_status(payload, ALLOWED_STATUSES) is None

    @pytest.mark.parametrize("payload", XSS_PAYLOADS + SQL_INJECTION_PAYLOADS)
    def test_department_kept_as_bound_value(self, payload: str) -> None:
        from directory_api.repositories.employee_repository import EmployeeRepository
        from directory_api.services.query_builder import build_employee_query

        query = build_employee_query(department=payload)
        compiled = EmployeeRepository(session=None).build_statement(query).compile()

        assert query.department == payload
        assert payload not in str(compiled)
        assert payload in compiled.params.values()

    def test_like_wildcard_escaping(self) -> None:
        from directory_api.utils.validation import escape_like_wildcards

        assert escape_like_wildcards("test%value") == r"test\%value"
        assert escape_like_wildcards("test_value") == r"test\_value"
        assert escape_like_wildcards("test\\value") == r"test\\value"

    def test_empty_and_none_handling(self) -> None:
        from directory_api.utils.validation import (
            sanitize_department,
            sanitize_search,
            sanitize_status,
        )

        assert sanitize_search(None) is None
        assert sanitize_department(None) is None
        assert sanitize_status(None) is None
        assert sanitize_search("   ") is None
        assert sanitize_department("") is None

    def test_search_length_capped(self) -> None:
        from directory_api.utils.validation import sanitize_search

        assert len(sanitize_search("A" * 1000)) == 200

    def test_search_terms_capped(self) -> None:
        from directory_api.utils.validation import MAX_SEARCH_TERMS, split_search_terms

        terms = split_search_terms(" ".join(f"t{i}" for i in range(50)))
        assert len(terms) == MAX_SEARCH_TERMS


class TestListingEndpointHostileInput:
    """Hostile listing parameters never break the query or leak rows."""

    @pytest.mark.parametrize("payload", ENDPOINT_PAYLOADS)
    async def test_search_injection_matches_nothing(
        self, client: AsyncClient, auth_headers: dict[str, str], payload: str
    ) -> None:
        await client.post(f"{API}/employees", json=employee_payload(), headers=auth_headers)

        response = await client.get(f"{API}/employees", params={"search": payload})

        assert response.status_code == 200
        assert response.json() == []
        # Table still intact
        assert len((await client.get(f"{API}/employees")).json()) == 1

    @pytest.mark.parametrize("payload", ENDPOINT_PAYLOADS[:5])
    async def test_sort_injection_uses_default_order(
        self, client: AsyncClient, payload: str
    ) -> None:
        response = await client.get(
            f"{API}/employees", params={"sortBy": payload}
        )

        assert response.status_code == 200

    def test_compiled_statement_is_parameterized(self) -> None:
        from sqlalchemy.dialects import sqlite

        from directory_api.repositories.employee_repository import EmployeeRepository
        from directory_api.services.query_builder import build_employee_query

        malicious = "x'; DROP TABLE employees; --"
        query = build_employee_query(search=malicious, department="Sales")
        stmt = EmployeeRepository(session=None).build_statement(query)

        sql = str(stmt.compile(dialect=sqlite.dialect()))
        assert "DROP TABLE" not in sql
        assert "?" in sql
