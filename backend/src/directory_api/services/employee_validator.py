"""Field-level validation of employee records."""

import re
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any

from directory_api.exceptions import RecordValidationError
from directory_api.models.domain.employee import MAX_AGE, MIN_AGE, EmployeeStatus

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

# Required on create, in the order violations are reported
REQUIRED_FIELDS: dict[str, str] = {
    "name": "Employee name is required",
    "age": "Age is required",
    "email": "Email is required",
    "position": "Position is required",
    "department": "Department is required",
}

TEXT_FIELDS = ("name", "email", "position", "department")


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class EmployeeValidator:
    """Checks candidate employee records against the field constraints.

    Pure: never touches storage. Every violated field contributes one
    message and all of them are raised together.
    """

    def __init__(
        self,
        department_allow_list: set[str] | None = None,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        """Initialize the validator.

        Args:
            department_allow_list: Accepted departments; empty or None accepts any
            today: Clock used for the hire date upper bound
        """
        self.department_allow_list = department_allow_list or set()
        self.today = today

    def validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Validate a full record for creation.

        Args:
            data: Candidate field values keyed by attribute name

        Returns:
            Normalized field values, with hire_date defaulted to today

        Raises:
            RecordValidationError: If any field is missing or invalid
        """
        values = self._normalize(data)
        values.setdefault("hire_date", self.today())

        errors: dict[str, str] = {}
        for field, message in REQUIRED_FIELDS.items():
            if values.get(field) is None:
                errors[field] = message

        for field, value in values.items():
            if field not in errors:
                self._check_field(field, value, errors)

        if errors:
            raise RecordValidationError(errors)
        return values

    def validate_update(self, data: dict[str, Any]) -> dict[str, Any]:
        """Validate the fields present in a partial update.

        Args:
            data: Fields to change keyed by attribute name; None means absent

        Returns:
            Normalized values for the present fields only

        Raises:
            RecordValidationError: If any present field is invalid
        """
        values = self._normalize(data)
        # Derived at creation and frozen
        values.pop("resignation_year", None)

        errors: dict[str, str] = {}
        for field, value in values.items():
            self._check_field(field, value, errors)

        if errors:
            raise RecordValidationError(errors)
        return values

    def _normalize(self, data: dict[str, Any]) -> dict[str, Any]:
        """Drop absent values and trim text fields.

        A text field that is blank after trimming is kept as an empty string
        so it fails the non-empty check instead of being treated as absent.
        """
        values: dict[str, Any] = {}
        for field, value in data.items():
            if value is None:
                continue
            if field in TEXT_FIELDS and isinstance(value, str):
                value = value.strip()
            values[field] = value
        return values

    def _check_field(self, field: str, value: Any, errors: dict[str, str]) -> None:
        """Record a violation for ``field`` if ``value`` breaks its constraint."""
        if field in TEXT_FIELDS and (not isinstance(value, str) or not value):
            errors[field] = REQUIRED_FIELDS[field]
            return

        if field == "age":
            if isinstance(value, bool) or not isinstance(value, int):
                errors[field] = "Age must be a whole number"
            elif value < MIN_AGE:
                errors[field] = f"Employee must be at least {MIN_AGE} years old"
            elif value > MAX_AGE:
                errors[field] = f"Age must be less than {MAX_AGE}"
        elif field == "email":
            if not EMAIL_PATTERN.match(value):
                errors[field] = "Please enter a valid email address"
        elif field == "department":
            if self.department_allow_list and value not in self.department_allow_list:
                allowed = ", ".join(sorted(self.department_allow_list))
                errors[field] = f"Department must be one of: {allowed}"
        elif field == "hire_date":
            if not isinstance(value, date):
                errors[field] = "Hire date must be a valid date"
            elif value > self.today():
                errors[field] = "Hire date cannot be in the future"
        elif field == "status":
            if value not in set(EmployeeStatus):
                allowed = ", ".join(s.value for s in EmployeeStatus)
                errors[field] = f"Status must be one of: {allowed}"
