"""
Database boundary package.

Exports the declarative base, connection helpers and ORM models.

Dependencies: sqlalchemy, asyncpg, pgvector
System role: PostgreSQL persistence for documents and chunks
"""

from docqa.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docqa.boundary.db.connection import (
    build_session_factory,
    create_engine_from_settings,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docqa.boundary.db.models import ChunkModel, DocumentModel

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "build_session_factory",
    "create_engine_from_settings",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ChunkModel",
    "DocumentModel",
]
