"""
Translate driver-level storage failures into the platform exception taxonomy.

IntegrityError  -> ConstraintViolationError(constraint=<declared constraint name>)
StaleDataError  -> ConcurrencyConflictError

PostgreSQL reports the violated constraint by name (asyncpg `constraint_name`,
psycopg `diag.constraint_name`). SQLite only reports the columns
("UNIQUE constraint failed: ticket.showtime_id, ticket.seat_id"), so those are matched
back to the UniqueConstraint declared on Base.metadata.
"""

from contextlib import contextmanager
import re
from typing import Any, Iterator

from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from src.platform.database.orm_db_setting import Base
from src.platform.exception.exceptions import ConcurrencyConflictError, ConstraintViolationError


_PG_FOREIGN_KEY_VIOLATION = '23503'
_SQLITE_UNIQUE = re.compile(r'UNIQUE constraint failed: (?P<columns>[\w., ]+)')


def _driver_errors(error: IntegrityError) -> list[Any]:
    # asyncpg errors arrive wrapped in SQLAlchemy's DBAPI adapter
    errors = [error.orig]
    if error.orig is not None and error.orig.__cause__ is not None:
        errors.append(error.orig.__cause__)
    return errors


def _reported_constraint_name(error: IntegrityError) -> str | None:
    for driver_error in _driver_errors(error):
        if name := getattr(driver_error, 'constraint_name', None):
            return name
        if name := getattr(getattr(driver_error, 'diag', None), 'constraint_name', None):
            return name
    return None


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    for driver_error in _driver_errors(error):
        if _PG_FOREIGN_KEY_VIOLATION in (
            getattr(driver_error, 'sqlstate', None),
            getattr(driver_error, 'pgcode', None),
        ):
            return True
    return 'foreign key' in str(error.orig).lower()


def _sqlite_unique_constraint_name(message: str) -> str | None:
    match = _SQLITE_UNIQUE.search(message)
    if not match:
        return None

    qualified = [column.strip() for column in match.group('columns').split(',')]
    table_name = qualified[0].split('.')[0]
    columns = {column.split('.')[-1] for column in qualified}

    table = Base.metadata.tables.get(table_name)
    if table is None:
        return None
    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint) and {c.name for c in constraint.columns} == columns:
            return str(constraint.name) if constraint.name else None
    return None


def _declared_name_in_message(message: str) -> str | None:
    for table in Base.metadata.tables.values():
        for constraint in table.constraints:
            if constraint.name and str(constraint.name) in message:
                return str(constraint.name)
    return None


def resolve_constraint_violation(error: IntegrityError) -> ConstraintViolationError:
    message = str(error.orig)
    foreign_key = _is_foreign_key_violation(error)
    constraint = (
        _reported_constraint_name(error)
        or _sqlite_unique_constraint_name(message)
        or _declared_name_in_message(message)
    )
    return ConstraintViolationError(constraint, foreign_key=foreign_key, detail=message)


@contextmanager
def translate_storage_errors() -> Iterator[None]:
    try:
        yield
    except StaleDataError as e:
        raise ConcurrencyConflictError() from e
    except IntegrityError as e:
        raise resolve_constraint_violation(e) from e
