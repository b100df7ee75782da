"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, vector builders, fake providers
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import math
from unittest.mock import MagicMock

import pytest

DIMENSION = 768


def axis_vector(axis: int, dimension: int = DIMENSION) -> list[float]:
    """Unit vector along one axis."""
    vector = [0.0] * dimension
    vector[axis] = 1.0
    return vector


def vector_at_distance(axis: int, other_axis: int, distance: float, dimension: int = DIMENSION) -> list[float]:
    """Unit vector whose cosine distance to axis_vector(axis) equals distance."""
    cosine = 1.0 - distance
    vector = [0.0] * dimension
    vector[axis] = cosine
    vector[other_axis] = math.sqrt(1.0 - cosine * cosine)
    return vector


class FirstWordEmbedder:
    """Fake embedder returning a vector chosen by the text's first word."""

    def __init__(self, vectors: dict[str, list[float]], dimension: int = DIMENSION) -> None:
        self.dimension = dimension
        self.vectors = vectors
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        first_word = text.split()[0] if text.split() else ""
        return self.vectors.get(first_word, axis_vector(DIMENSION - 1, self.dimension))


class InMemoryBlobStore:
    """Fake blob store keeping objects in a dict."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}

    def put(self, data: bytes, path: str) -> str:
        self.objects[path] = data
        return path

    def get(self, path: str) -> bytes:
        return self.objects[path]


@pytest.fixture
def make_axis_vector():
    """Provide the axis_vector builder."""
    return axis_vector


@pytest.fixture
def make_vector_at_distance():
    """Provide the vector_at_distance builder."""
    return vector_at_distance


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine sharing one connection (StaticPool)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from docqa.boundary.db.base import Base
    from docqa.boundary.db import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Session factory bound to the in-memory engine."""
    from docqa.boundary.db.connection import build_session_factory

    return build_session_factory(test_engine)


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create in-memory SQLite async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def vector_store():
    """ChunkVectorStore with the production dimension."""
    from docqa.boundary.vdb.chunk_vector_store import ChunkVectorStore

    return ChunkVectorStore(dimension=DIMENSION)


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    """In-memory blob store."""
    return InMemoryBlobStore()


@pytest.fixture
def first_word_embedder() -> FirstWordEmbedder:
    """Embedder with no vectors registered yet."""
    return FirstWordEmbedder({})


@pytest.fixture
def mock_task_queue():
    """TaskQueue recording enqueued tasks."""
    return MagicMock()


@pytest.fixture
async def sample_document(test_async_db):
    """Committed document row with no chunks."""
    from docqa.boundary.db.CRUD.document_crud import document_crud

    document = await document_crud.create(
        test_async_db,
        title="Employee Handbook",
        file_path="/rag_files/1700000000_employee-handbook.txt",
    )
    await test_async_db.commit()
    return document
