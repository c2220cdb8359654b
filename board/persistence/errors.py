"""Translation of storage errors into domain errors."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy.exc import DBAPIError, IntegrityError

from board.domain.error import (
    ConstraintViolation,
    ForeignKeyViolation,
    InternalError,
    UniqueViolation,
)

# SQLSTATE codes for integrity failures
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(error: IntegrityError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def classify_integrity_error(error: IntegrityError, table: str) -> ConstraintViolation:
    """Map a driver integrity error onto the constraint taxonomy.

    PostgreSQL reports a SQLSTATE code; SQLite only reports a message, so
    the message text is the fallback.
    """
    detail = str(error.orig)
    code = _sqlstate(error)
    lowered = detail.lower()

    if code == UNIQUE_VIOLATION or "unique" in lowered or "duplicate" in lowered:
        return UniqueViolation(f"Unique constraint violated on {table}", table, detail)
    if code == FOREIGN_KEY_VIOLATION or "foreign key" in lowered:
        return ForeignKeyViolation(
            f"Foreign key constraint violated on {table}", table, detail
        )
    return ConstraintViolation(f"Constraint violated on {table}", table, detail)


@contextmanager
def translate_errors(table: str) -> Iterator[None]:
    """Re-raise SQLAlchemy errors from the block as domain errors.

    Args:
        table: Table the block operates on, attached to the raised error
    """
    try:
        yield
    except IntegrityError as e:
        raise classify_integrity_error(e, table) from e
    except DBAPIError as e:
        logfire.error("Database error", table=table, error=str(e.orig))
        raise InternalError(f"Database error on {table}: {e.orig}") from e
