"""Record validator tests."""

from datetime import date

import pytest

from directory_api.exceptions import RecordValidationError
from directory_api.services.employee_validator import EmployeeValidator

TODAY = date(2024, 6, 15)


def make_validator(**kwargs) -> EmployeeValidator:
    return EmployeeValidator(today=lambda: TODAY, **kwargs)


def valid_record(**overrides) -> dict:
    record = {
        "name": "Alice Smith",
        "age": 30,
        "email": "alice@acme.com",
        "position": "Engineer",
        "department": "Engineering",
        "hire_date": date(2020, 1, 1),
    }
    record.update(overrides)
    return record


class TestValidateCreate:
    """Full-record validation."""

    def test_valid_record_passes(self) -> None:
        values = make_validator().validate_create(valid_record())
        assert values["name"] == "Alice Smith"
        assert values["hire_date"] == date(2020, 1, 1)

    def test_hire_date_defaults_to_today(self) -> None:
        record = valid_record()
        del record["hire_date"]

        values = make_validator().validate_create(record)

        assert values["hire_date"] == TODAY

    def test_text_fields_are_trimmed(self) -> None:
        values = make_validator().validate_create(valid_record(name="  Alice  "))
        assert values["name"] == "Alice"

    def test_all_missing_fields_reported_together(self) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_create({})

        assert exc_info.value.messages == [
            "Employee name is required",
            "Age is required",
            "Email is required",
            "Position is required",
            "Department is required",
        ]

    def test_blank_name_is_missing(self) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_create(valid_record(name="   "))

        assert exc_info.value.errors == {"name": "Employee name is required"}

    @pytest.mark.parametrize(
        ("age", "message"),
        [
            (17, "Employee must be at least 18 years old"),
            (101, "Age must be less than 100"),
            (True, "Age must be a whole number"),
        ],
    )
    def test_age_bounds(self, age, message: str) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_create(valid_record(age=age))

        assert exc_info.value.errors["age"] == message

    @pytest.mark.parametrize("age", [18, 100])
    def test_age_bounds_are_inclusive(self, age: int) -> None:
        assert make_validator().validate_create(valid_record(age=age))["age"] == age

    @pytest.mark.parametrize("email", ["alice", "alice@acme", "alice acme@x.com", "@acme.com"])
    def test_malformed_email(self, email: str) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_create(valid_record(email=email))

        assert exc_info.value.errors["email"] == "Please enter a valid email address"

    def test_future_hire_date(self) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_create(valid_record(hire_date=date(2024, 6, 16)))

        assert exc_info.value.errors["hire_date"] == "Hire date cannot be in the future"

    def test_hire_date_today_is_accepted(self) -> None:
        values = make_validator().validate_create(valid_record(hire_date=TODAY))
        assert values["hire_date"] == TODAY

    def test_multiple_violations_collected(self) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_create(valid_record(age=12, email="nope", position=""))

        assert set(exc_info.value.errors) == {"age", "email", "position"}

    def test_department_allow_list(self) -> None:
        validator = make_validator(department_allow_list={"Engineering", "Sales"})

        assert validator.validate_create(valid_record(department="Sales"))["department"] == "Sales"
        with pytest.raises(RecordValidationError) as exc_info:
            validator.validate_create(valid_record(department="Marketing"))

        assert exc_info.value.errors["department"] == "Department must be one of: Engineering, Sales"

    def test_open_department_set_by_default(self) -> None:
        values = make_validator().validate_create(valid_record(department="Anything Goes"))
        assert values["department"] == "Anything Goes"


class TestValidateUpdate:
    """Partial-update validation."""

    def test_only_present_fields_checked(self) -> None:
        assert make_validator().validate_update({"age": 40}) == {"age": 40}

    def test_none_means_absent(self) -> None:
        assert make_validator().validate_update({"age": None, "name": "Bob"}) == {"name": "Bob"}

    def test_resignation_year_is_dropped(self) -> None:
        assert make_validator().validate_update({"resignation_year": 2099}) == {}

    def test_present_field_still_validated(self) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_update({"age": 10})

        assert exc_info.value.messages == ["Employee must be at least 18 years old"]

    def test_empty_string_is_not_absent(self) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_update({"department": ""})

        assert exc_info.value.errors == {"department": "Department is required"}

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(RecordValidationError) as exc_info:
            make_validator().validate_update({"status": "Retired"})

        assert exc_info.value.errors["status"] == (
            "Status must be one of: Active, On Leave, Terminated"
        )
