"""SQLAlchemy declarative Base and shared column helpers."""

import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def new_id() -> str:
    """Opaque record id assigned on insert (UUID4 text)."""
    return str(uuid.uuid4())


def parse_id(value: str) -> str:
    """
    Return the canonical form of a record id.
    Raises ValueError if value is not a well-formed id.
    """
    return str(uuid.UUID(str(value)))


def utcnow() -> datetime:
    """Timestamp default with microsecond resolution, so creation order is stable."""
    return datetime.now(UTC)
