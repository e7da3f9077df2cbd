"""Helpers for reading constraint violations out of driver errors."""
from sqlalchemy.exc import IntegrityError

# SQLSTATE reported by PostgreSQL for a unique constraint violation
UNIQUE_VIOLATION = "23505"


def constraint_code(error: IntegrityError) -> str | None:
    """
    Return the SQLSTATE-style code of an IntegrityError, if the driver exposes one.

    asyncpg errors carry ``sqlstate`` (SQLAlchemy also copies it to ``pgcode``).
    SQLite has no SQLSTATE, so its extended unique-constraint result code is
    reported as UNIQUE_VIOLATION.
    """
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return str(code)
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return UNIQUE_VIOLATION
    if "UNIQUE constraint failed" in str(orig):
        return UNIQUE_VIOLATION
    return None


def constraint_message(error: IntegrityError) -> str:
    """Human-readable message of the underlying driver error."""
    return str(error.orig) if error.orig is not None else str(error)
