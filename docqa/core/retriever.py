"""
Retrieval logic over the chunk vector store.

Turns a question embedding into ranked, numbered contexts. An empty result is
the "no relevant content" signal, not an error.

Dependencies: docqa.boundary.vdb, docqa.core.rag.schemas
System role: RAG retrieval business logic
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.vdb import ChunkVectorStore
from docqa.core.rag.schemas import RetrievalResult, RetrievedContext

logger = logging.getLogger(__name__)


class Retriever:
    """Nearest-neighbor retrieval with distance threshold and result cap."""

    def __init__(
        self,
        vector_store: ChunkVectorStore,
        max_distance: float = 0.6,
        limit: int = 5,
    ) -> None:
        """
        Initialize retriever.

        Args:
            vector_store: Chunk vector store
            max_distance: Default exclusive cosine distance threshold
            limit: Default maximum number of contexts
        """
        self._vector_store = vector_store
        self._max_distance = max_distance
        self._limit = limit

    async def retrieve(
        self,
        session: AsyncSession,
        question_embedding: Sequence[float],
        max_distance: float | None = None,
        limit: int | None = None,
        document_ids: set[UUID] | None = None,
    ) -> RetrievalResult:
        """
        Retrieve relevant chunks.

        Args:
            session: Async database session
            question_embedding: Embedded question
            max_distance: Override of the default threshold
            limit: Override of the default result cap
            document_ids: Optional eligible document restriction

        Returns:
            RetrievalResult: Contexts numbered 1..N in store order
        """
        hits = await self._vector_store.nearest(
            session,
            question_embedding,
            max_distance=self._max_distance if max_distance is None else max_distance,
            limit=self._limit if limit is None else limit,
            document_ids=document_ids,
        )

        contexts = [
            RetrievedContext(
                number=rank,
                chunk_id=hit.chunk_id,
                document_id=hit.document_id,
                chunk_index=hit.chunk_index,
                content=hit.content,
                distance=hit.distance,
            )
            for rank, hit in enumerate(hits, start=1)
        ]

        if not contexts:
            logger.info(f"{__name__}:retrieve - No relevant chunks found")
        return RetrievalResult(contexts=contexts)
