"""Input validation utilities to prevent injection attacks."""

# Maximum lengths for common fields
MAX_SEARCH_LENGTH = 200
MAX_SEARCH_TERMS = 10
MAX_DEPARTMENT_LENGTH = 255
MAX_STATUS_LENGTH = 50
MAX_SORT_BY_LENGTH = 50


def sanitize_search(search: str | None, max_length: int = MAX_SEARCH_LENGTH) -> str | None:
    """Sanitize search input.

    Args:
        search: Raw search string
        max_length: Maximum allowed length

    Returns:
        Sanitized search string or None
    """
    if search is None:
        return None

    return search[:max_length].strip() or None


def split_search_terms(search: str | None, max_terms: int = MAX_SEARCH_TERMS) -> tuple[str, ...]:
    """Split a sanitized search string into distinct whitespace-separated terms.

    Args:
        search: Sanitized search string
        max_terms: Maximum number of terms kept

    Returns:
        Tuple of terms in input order, duplicates removed
    """
    if not search:
        return ()

    terms: list[str] = []
    for term in search.split():
        if term.lower() not in (t.lower() for t in terms):
            terms.append(term)
    return tuple(terms[:max_terms])


def sanitize_department(
    department: str | None, max_length: int = MAX_DEPARTMENT_LENGTH
) -> str | None:
    """Sanitize department filter input.

    Args:
        department: Raw department string
        max_length: Maximum allowed length

    Returns:
        Sanitized department string or None
    """
    if department is None:
        return None

    return department[:max_length].strip() or None


def validate_sort_by(sort_by: str | None, allowed_columns: dict[str, str], default: str) -> str:
    """Resolve a sort key against a whitelist.

    Args:
        sort_by: Raw sort key as sent by the client
        allowed_columns: Mapping of accepted client keys to column names
        default: Column used when the key is missing or unknown

    Returns:
        Validated column name
    """
    if sort_by:
        column = allowed_columns.get(sort_by[:MAX_SORT_BY_LENGTH].strip())
        if column:
            return column
    return default


def sanitize_status(status: str | None, allowed_values: set[str] | None = None) -> str | None:
    """Sanitize status filter input.

    Matching against ``allowed_values`` is case-insensitive; the allowed
    spelling is returned.

    Args:
        status: Raw status string
        allowed_values: Optional set of allowed status values

    Returns:
        Sanitized status string or None
    """
    if status is None:
        return None

    status = status[:MAX_STATUS_LENGTH].strip()

    if not status:
        return None

    if allowed_values:
        for allowed in allowed_values:
            if allowed.lower() == status.lower():
                return allowed
        return None

    return status


def escape_like_wildcards(value: str) -> str:
    """Escape SQL LIKE wildcards so they match literally.

    Args:
        value: Raw string value to escape

    Returns:
        Escaped string safe for use in LIKE patterns

    Example:
        >>> escape_like_wildcards("test%value")
        'test\\%value'
        >>> escape_like_wildcards("test_value")
        'test\\_value'
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
