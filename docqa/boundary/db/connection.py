"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and the FastAPI
dependency for session injection. Celery workers build a private engine per
task run because async engines are bound to the event loop that created them.

Dependencies: sqlalchemy, asyncpg, docqa.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from pgvector.asyncpg import register_vector
from sqlalchemy import event, text
from sqlalchemy.pool import NullPool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from docqa.configs import get_settings


def create_engine_from_settings() -> AsyncEngine:
    """
    Create a new async engine from DatabaseSettings.

    Pool sizing only applies to PostgreSQL; SQLite URLs (local dev) use the
    dialect's default pool. PostgreSQL connections get the pgvector codec
    registered on connect.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    db_config = get_settings().database
    url = db_config.async_database_url

    engine_kwargs: dict = {"echo": db_config.echo_sql}
    if url.startswith("postgresql"):
        engine_kwargs.update(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_pre_ping=True,
        )

    engine = create_async_engine(url, **engine_kwargs)

    if url.startswith("postgresql"):

        @event.listens_for(engine.sync_engine, "connect")
        def _register_vector_codec(dbapi_connection, connection_record):
            dbapi_connection.run_async(register_vector)

    return engine


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Get the process-wide async engine used by the API.

    Returns:
        AsyncEngine: Cached async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    """
    return create_engine_from_settings()


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create an async session factory bound to an engine.

    Sessions use autoflush=False and expire_on_commit=False so that services
    control flushing explicitly and returned ORM objects stay readable after
    commit.

    Args:
        engine: Async engine to bind

    Returns:
        async_sessionmaker: Session factory
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get the session factory bound to the API engine.

    Returns:
        async_sessionmaker: Cached session factory
    """
    return build_session_factory(get_async_engine())


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Yields:
        AsyncSession: Async SQLAlchemy session (scoped to request lifetime)

    Usage:
        from fastapi import Depends

        @router.get("/documents/{id}")
        async def get_document(id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await document_crud.get_by_id(db, id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def dispose_engine() -> None:
    """Dispose the cached API engine and forget cached factories."""
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
    get_async_session_factory.cache_clear()
    get_async_engine.cache_clear()


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create missing tables (and the pgvector extension on PostgreSQL).

    Args:
        engine: Target async engine
    """
    from docqa.boundary.db.base import Base
    from docqa.boundary.db import models  # noqa: F401  registers tables on Base.metadata

    if engine.dialect.name == "postgresql":
        # the vector type must exist before any connection registers its codec
        bootstrap = create_async_engine(engine.url, poolclass=NullPool)
        try:
            async with bootstrap.begin() as conn:
                await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        finally:
            await bootstrap.dispose()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
