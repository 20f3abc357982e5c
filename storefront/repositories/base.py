"""Shared helpers for repositories."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# SQLSTATE for unique_violation in PostgreSQL
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return True if the integrity error was raised by a unique constraint.

    PostgreSQL drivers expose the SQLSTATE; SQLite only reports it in the
    message.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    return "unique" in str(orig).lower()


class Repository:
    """Base class holding the session of the active unit of work."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
