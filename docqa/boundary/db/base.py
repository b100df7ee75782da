"""
SQLAlchemy declarative base for the documents and chunks tables.

Columns use portable types (Uuid, timezone-aware DateTime) so the same models
run on PostgreSQL with pgvector in production and on SQLite in tests.
Constraint names follow one convention so migrations and error messages
refer to predictable names.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    """Timezone-aware current time used for every row timestamp."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base; DocumentModel and ChunkModel register here for create_all."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class UUIDMixin:
    """UUID v4 primary key generated in Python on insert."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
    """
    Row timestamps.

    Attributes:
        created_at: Set on insert
        updated_at: Set on insert, refreshed on every UPDATE (including
            title edits and file replacement on documents)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
