"""Employee repository."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import Float, Select, and_, case, distinct, false, func, or_, select
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from directory_api.models.domain.employee import EmployeeQuery, EmployeeStatus
from directory_api.models.orm.employee import EmployeeORM
from directory_api.repositories.base import BaseRepository
from directory_api.utils.validation import escape_like_wildcards

SEARCH_COLUMNS = (
    EmployeeORM.name,
    EmployeeORM.email,
    EmployeeORM.position,
    EmployeeORM.department,
)


class days_since_epoch(FunctionElement):
    """Number of days between 1970-01-01 and a DATE column."""

    type = Float()
    name = "days_since_epoch"
    inherit_cache = True


@compiles(days_since_epoch)
def _days_since_epoch_default(element, compiler, **kw):
    (arg,) = list(element.clauses)
    return "(EXTRACT(EPOCH FROM %s) / 86400.0)" % compiler.process(arg, **kw)


@compiles(days_since_epoch, "postgresql")
def _days_since_epoch_postgresql(element, compiler, **kw):
    # date - date yields an integer day count
    (arg,) = list(element.clauses)
    return "(%s - DATE '1970-01-01')" % compiler.process(arg, **kw)


@compiles(days_since_epoch, "sqlite")
def _days_since_epoch_sqlite(element, compiler, **kw):
    # Julian day number of the Unix epoch
    (arg,) = list(element.clauses)
    return "(julianday(%s) - 2440587.5)" % compiler.process(arg, **kw)


@dataclass(frozen=True)
class EmployeeAggregate:
    """Raw fleet-wide aggregate computed by the database."""

    total: int
    active: int
    departments: int
    avg_hire_day: float | None


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    def build_statement(self, query: EmployeeQuery) -> Select:
        """Compile a query descriptor into a SELECT statement.

        Every search term must match at least one of the searchable columns,
        case-insensitively and as a substring.

        Args:
            query: Filter and sort descriptor

        Returns:
            SELECT statement over employees
        """
        stmt = select(EmployeeORM)

        if query.match_none:
            stmt = stmt.where(false())

        if query.search_terms:
            term_filters = []
            for term in query.search_terms:
                pattern = f"%{escape_like_wildcards(term)}%"
                term_filters.append(
                    or_(*(column.ilike(pattern, escape="\\") for column in SEARCH_COLUMNS))
                )
            stmt = stmt.where(and_(*term_filters))

        if query.status is not None:
            stmt = stmt.where(EmployeeORM.status == query.status.value)

        if query.department is not None:
            stmt = stmt.where(EmployeeORM.department == query.department)

        sort_column = getattr(EmployeeORM, query.sort_by.value, EmployeeORM.created_at)
        if query.sort_order == "asc":
            stmt = stmt.order_by(sort_column.asc(), EmployeeORM.id.asc())
        else:
            stmt = stmt.order_by(sort_column.desc(), EmployeeORM.id.desc())

        return stmt

    async def find(self, query: EmployeeQuery) -> list[EmployeeORM]:
        """Get employees matching a query descriptor.

        Args:
            query: Filter and sort descriptor

        Returns:
            Matching employees in the requested order
        """
        result = await self.session.execute(self.build_statement(query))
        return list(result.scalars().all())

    async def email_exists(self, email: str, exclude_id: UUID | None = None) -> bool:
        """Check whether an email is used by an employee.

        Args:
            email: Email address to look up
            exclude_id: Employee to ignore (the one being updated)

        Returns:
            True if another employee has the email
        """
        stmt = select(EmployeeORM.id).where(EmployeeORM.email == email)
        if exclude_id is not None:
            stmt = stmt.where(EmployeeORM.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def get_all_departments(self) -> list[str]:
        """Get all distinct department names.

        Returns:
            Sorted list of department names
        """
        result = await self.session.execute(
            select(EmployeeORM.department).distinct().order_by(EmployeeORM.department)
        )
        return [row[0] for row in result.all()]

    async def aggregate(self) -> EmployeeAggregate:
        """Compute counts and the mean hire day in a single query.

        Returns:
            EmployeeAggregate over all employees
        """
        stmt = select(
            func.count(EmployeeORM.id),
            func.coalesce(
                func.sum(case((EmployeeORM.status == EmployeeStatus.ACTIVE.value, 1), else_=0)),
                0,
            ),
            func.count(distinct(EmployeeORM.department)),
            func.avg(days_since_epoch(EmployeeORM.hire_date)),
        )
        total, active, departments, avg_hire_day = (await self.session.execute(stmt)).one()
        return EmployeeAggregate(
            total=int(total or 0),
            active=int(active or 0),
            departments=int(departments or 0),
            avg_hire_day=float(avg_hire_day) if avg_hire_day is not None else None,
        )
