"""Translation of listing parameters into an employee query descriptor."""

from directory_api.models.domain.employee import (
    ALL_FILTER,
    EmployeeQuery,
    EmployeeSortField,
    EmployeeStatus,
)
from directory_api.utils.validation import (
    sanitize_department,
    sanitize_search,
    sanitize_status,
    split_search_terms,
    validate_sort_by,
)


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


# Client sort keys (camelCase as sent by the web client, snake_case as stored)
SORT_KEYS: dict[str, str] = {
    **{field.value: field.value for field in EmployeeSortField},
    **{_to_camel(field.value): field.value for field in EmployeeSortField},
}

DEFAULT_SORT_FIELD = EmployeeSortField.CREATED_AT
DEFAULT_SORT_ORDER = "desc"

ALLOWED_STATUSES = {status.value for status in EmployeeStatus}


def _is_all(value: str | None) -> bool:
    return value is not None and value.strip().lower() == ALL_FILTER.lower()


def build_employee_query(
    search: str | None = None,
    status: str | None = None,
    department: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> EmployeeQuery:
    """Build a query descriptor from raw listing parameters.

    Absent, empty and ``All`` filters produce no constraint. A status that
    is not one of the known values matches no record. Unknown sort keys
    fall back to creation time and any sort order other than ``asc`` means
    descending.

    Args:
        search: Free text matched against name, email, position and department
        status: Exact status, or ``All``
        department: Exact department, or ``All``
        sort_by: Field to sort by
        sort_order: ``asc`` or ``desc``

    Returns:
        EmployeeQuery descriptor
    """
    status_filter = None
    match_none = False
    if status and status.strip() and not _is_all(status):
        sanitized_status = sanitize_status(status, ALLOWED_STATUSES)
        if sanitized_status:
            status_filter = EmployeeStatus(sanitized_status)
        else:
            match_none = True

    department_filter = None if _is_all(department) else sanitize_department(department)

    sort_field = validate_sort_by(sort_by, SORT_KEYS, DEFAULT_SORT_FIELD.value)
    order = "asc" if sort_order and sort_order.strip().lower() == "asc" else DEFAULT_SORT_ORDER

    return EmployeeQuery(
        search_terms=split_search_terms(sanitize_search(search)),
        status=status_filter,
        department=department_filter,
        sort_by=EmployeeSortField(sort_field),
        sort_order=order,
        match_none=match_none,
    )
