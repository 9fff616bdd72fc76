"""Storage failure translation tests."""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError, OperationalError

from conftest import API
from directory_api.exceptions import StorageUnavailableError
from directory_api.services.employee_service import EmployeeService
from directory_api.utils.errors import is_unique_violation, translate_storage_errors


class TestTranslateStorageErrors:
    """Transient driver failures become StorageUnavailableError."""

    async def test_operational_error_translated(self) -> None:
        @translate_storage_errors("probe")
        async def probe() -> None:
            raise OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))

        with pytest.raises(StorageUnavailableError) as exc_info:
            await probe()

        assert exc_info.value.details == {"operation": "probe"}
        assert isinstance(exc_info.value.__cause__, OperationalError)

    async def test_other_errors_pass_through(self) -> None:
        @translate_storage_errors("probe")
        async def probe() -> None:
            raise KeyError("missing")

        with pytest.raises(KeyError):
            await probe()

    async def test_endpoint_returns_500(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def broken(self, employee_id):
            raise ConnectionError("database went away")

        monkeypatch.setattr(
            "directory_api.repositories.employee_repository.EmployeeRepository.get_by_id", broken
        )

        response = await client.get(f"{API}/employees/{uuid4()}")

        assert response.status_code == 500
        assert response.json()["message"] == "Storage unavailable"
        assert response.json()["success"] is False


class TestIsUniqueViolation:
    """Recognizing duplicate-key errors from driver messages."""

    def test_sqlite_message(self) -> None:
        exc = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: employees.email")
        )
        assert is_unique_violation(exc, "email")
        assert not is_unique_violation(exc, "name")

    def test_postgresql_message(self) -> None:
        exc = IntegrityError(
            "INSERT",
            {},
            Exception('duplicate key value violates unique constraint "employees_email_key"'),
        )
        assert is_unique_violation(exc, "email")

    def test_not_null_is_not_unique(self) -> None:
        exc = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: employees.age"))
        assert not is_unique_violation(exc)


class TestServiceUniqueRace:
    """A unique violation from the store maps to DuplicateEmailError."""

    async def test_concurrent_insert_maps_to_duplicate(
        self, db_session, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from directory_api.exceptions import DuplicateEmailError
        from directory_api.models.dto.employee import EmployeeCreate

        service = EmployeeService(db_session)
        data = EmployeeCreate(
            name="Alice", age=30, email="alice@acme.com", position="Engineer",
            department="Engineering",
        )
        await service.create_employee(data)
        await db_session.commit()

        # Simulate losing the race: the pre-check sees no conflict
        async def no_conflict(self, email, exclude_id=None) -> bool:
            return False

        monkeypatch.setattr(
            "directory_api.repositories.employee_repository.EmployeeRepository.email_exists",
            no_conflict,
        )

        with pytest.raises(DuplicateEmailError):
            await service.create_employee(data)
