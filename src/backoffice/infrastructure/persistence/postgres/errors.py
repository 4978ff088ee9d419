"""Translation of PostgreSQL errors into the domain error taxonomy."""

import psycopg

from backoffice.domain.exceptions import (
    CheckConstraintViolationError,
    DatabaseError,
    ForeignKeyViolationError,
    InternalDatabaseError,
    NotNullViolationError,
    SerializationFailureError,
    UniqueConstraintError,
)

SQLSTATE_ERRORS: dict[str, type[DatabaseError]] = {
    "23505": UniqueConstraintError,
    "23503": ForeignKeyViolationError,
    "23502": NotNullViolationError,
    "23514": CheckConstraintViolationError,
    "40001": SerializationFailureError,
    "40P01": SerializationFailureError,
}


def translate_database_error(exc: BaseException) -> BaseException:
    """Map a psycopg error to its domain error; anything else is returned as is."""
    if not isinstance(exc, psycopg.Error):
        return exc
    error_cls = SQLSTATE_ERRORS.get(exc.sqlstate or "", InternalDatabaseError)
    return error_cls()


def describe_database_error(exc: psycopg.Error) -> str:
    """Short log line with SQLSTATE and constraint, without row data."""
    diag = exc.diag
    parts = [f"sqlstate={exc.sqlstate or 'unknown'}"]
    if diag.table_name:
        parts.append(f"table={diag.table_name}")
    if diag.constraint_name:
        parts.append(f"constraint={diag.constraint_name}")
    if diag.column_name:
        parts.append(f"column={diag.column_name}")
    return " ".join(parts)
