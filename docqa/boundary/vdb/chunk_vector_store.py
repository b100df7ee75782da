"""
Chunk vector store backed by PostgreSQL + pgvector.

Persists chunk rows, writes their embeddings and answers exact
nearest-neighbor queries by cosine distance. On PostgreSQL the distance is
computed in SQL with pgvector's <=> operator; other dialects (SQLite in dev
and tests) fall back to an exact numpy scan with the same ordering and
threshold rules.

Writes flush into the caller's session. The caller commits.

Dependencies: sqlalchemy, pgvector, numpy, docqa.boundary.db
System role: Vector index for RAG retrieval
"""

import logging
from typing import Sequence
from uuid import UUID

import numpy as np
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.db.models.chunk_model import ChunkModel
from docqa.boundary.vdb.vector_schemas import VectorSearchResult
from docqa.core.exceptions import (
    ChunkNotFoundError,
    ContractViolation,
    DocumentNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class ChunkVectorStore:
    """
    Chunk persistence and cosine nearest-neighbor search.

    Chunk indices per document are contiguous from 0: put_chunk only accepts
    the next free index. Embeddings are nullable until the embedding task
    writes them, and rows without an embedding are never returned by
    nearest().
    """

    def __init__(self, dimension: int) -> None:
        """
        Initialize the store.

        Args:
            dimension: Required embedding dimensionality
        """
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        """Embedding dimensionality enforced by this store."""
        return self._dimension

    def _check_dimension(self, vector: Sequence[float]) -> None:
        if len(vector) != self._dimension:
            raise ContractViolation(
                expected_dimension=self._dimension,
                actual_dimension=len(vector),
            )

    async def put_chunk(
        self,
        session: AsyncSession,
        document_id: UUID,
        index: int,
        content: str,
    ) -> UUID:
        """
        Insert a chunk with its embedding unset.

        Args:
            session: Async database session
            document_id: Owning document UUID
            index: Chunk position, must equal the document's current chunk count
            content: Non-empty chunk text

        Returns:
            UUID: Generated chunk id

        Raises:
            ValidationError: Empty content or non-contiguous index
            DocumentNotFoundError: Unknown document
        """
        if not content or not content.strip():
            raise ValidationError("Chunk content must not be empty", field="content")

        if not await document_crud.exists(session, document_id):
            raise DocumentNotFoundError(document_id)

        expected_index = await chunk_crud.count_by_document_id(session, document_id)
        if index != expected_index:
            raise ValidationError(
                f"Chunk index {index} is not contiguous, expected {expected_index}",
                field="index",
                details={"document_id": str(document_id)},
            )

        chunk = await chunk_crud.create(
            session,
            document_id=document_id,
            chunk_index=index,
            content=content,
        )
        return chunk.id

    async def set_embedding(
        self,
        session: AsyncSession,
        chunk_id: UUID,
        vector: Sequence[float],
    ) -> None:
        """
        Write or overwrite a chunk's embedding.

        Writing the same vector twice leaves the row unchanged.

        Raises:
            ContractViolation: Vector length differs from the store dimension
            ChunkNotFoundError: Unknown chunk
        """
        self._check_dimension(vector)

        stmt = (
            update(ChunkModel)
            .where(ChunkModel.id == chunk_id)
            .values(embedding=[float(v) for v in vector])
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            raise ChunkNotFoundError(chunk_id)

        logger.debug(
            f"{__name__}:set_embedding - Embedding written",
            extra={"chunk_id": str(chunk_id)},
        )

    async def delete_chunks_of(self, session: AsyncSession, document_id: UUID) -> int:
        """
        Remove all chunks of a document.

        Returns:
            int: Number of chunks deleted
        """
        deleted = await chunk_crud.delete_by_document_id(session, document_id)
        logger.info(
            f"{__name__}:delete_chunks_of - Deleted {deleted} chunks",
            extra={"document_id": str(document_id), "deleted": deleted},
        )
        return deleted

    async def nearest(
        self,
        session: AsyncSession,
        query_vector: Sequence[float],
        max_distance: float,
        limit: int,
        document_ids: set[UUID] | None = None,
    ) -> list[VectorSearchResult]:
        """
        Find embedded chunks closest to a query vector.

        Args:
            session: Async database session
            query_vector: Query embedding of the store dimension
            max_distance: Exclusive cosine distance threshold
            limit: Maximum number of results
            document_ids: Optional candidate restriction; an empty set matches nothing

        Returns:
            list[VectorSearchResult]: Ascending by distance, ties broken by
            document id then chunk index

        Raises:
            ContractViolation: Query vector has the wrong dimension
            ValidationError: limit < 1
        """
        self._check_dimension(query_vector)
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")
        if document_ids is not None and not document_ids:
            return []

        connection = await session.connection()
        if connection.dialect.name == "postgresql":
            results = await self._nearest_sql(session, query_vector, max_distance, limit, document_ids)
        else:
            results = await self._nearest_scan(session, query_vector, max_distance, limit, document_ids)

        logger.info(
            f"{__name__}:nearest - Found {len(results)} chunks",
            extra={"max_distance": max_distance, "limit": limit, "results": len(results)},
        )
        return results

    async def _nearest_sql(
        self,
        session: AsyncSession,
        query_vector: Sequence[float],
        max_distance: float,
        limit: int,
        document_ids: set[UUID] | None,
    ) -> list[VectorSearchResult]:
        distance = ChunkModel.embedding.cosine_distance([float(v) for v in query_vector])
        stmt = (
            select(ChunkModel, distance.label("distance"))
            .where(ChunkModel.embedding.is_not(None))
            .where(distance < max_distance)
            .order_by(distance, ChunkModel.document_id, ChunkModel.chunk_index)
            .limit(limit)
        )
        if document_ids is not None:
            stmt = stmt.where(ChunkModel.document_id.in_(list(document_ids)))

        result = await session.execute(stmt)
        return [_to_result(chunk, float(dist)) for chunk, dist in result.all()]

    async def _nearest_scan(
        self,
        session: AsyncSession,
        query_vector: Sequence[float],
        max_distance: float,
        limit: int,
        document_ids: set[UUID] | None,
    ) -> list[VectorSearchResult]:
        query = np.asarray(query_vector, dtype=np.float64)
        query_norm = np.linalg.norm(query)
        if query_norm == 0:
            return []

        stmt = (
            select(ChunkModel)
            .where(ChunkModel.embedding.is_not(None))
            .execution_options(populate_existing=True)
        )
        if document_ids is not None:
            stmt = stmt.where(ChunkModel.document_id.in_(list(document_ids)))
        result = await session.execute(stmt)

        scored: list[tuple[float, ChunkModel]] = []
        for chunk in result.scalars().all():
            vector = np.asarray(chunk.embedding, dtype=np.float64)
            norm = np.linalg.norm(vector)
            # zero vectors have no cosine distance; pgvector yields NaN and never matches
            if norm == 0:
                continue
            dist = float(1.0 - np.dot(query, vector) / (query_norm * norm))
            if dist < max_distance:
                scored.append((dist, chunk))

        scored.sort(key=lambda item: (item[0], str(item[1].document_id), item[1].chunk_index))
        return [_to_result(chunk, dist) for dist, chunk in scored[:limit]]


def _to_result(chunk: ChunkModel, distance: float) -> VectorSearchResult:
    return VectorSearchResult(
        chunk_id=chunk.id,
        document_id=chunk.document_id,
        chunk_index=chunk.chunk_index,
        content=chunk.content,
        distance=distance,
    )
