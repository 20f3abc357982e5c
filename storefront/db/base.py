"""Declarative base shared by all ORM models."""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""

    pass


def utcnow() -> datetime:
    """Timezone-aware current time used for client-side timestamps."""
    return datetime.now(timezone.utc)
