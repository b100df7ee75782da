"""
Per-chunk embedding task.

Loads one chunk, embeds its content and writes the vector back. Runs under
at-least-once delivery, so every outcome is safe to repeat: a chunk that no
longer exists (document deleted or file replaced) is a successful no-op and
re-embedding overwrites with an equivalent vector.

Dependencies: sqlalchemy, fastapi.concurrency, docqa.boundary.vdb
System role: Asynchronous embedding stage of document ingestion pipeline
"""

import logging
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.boundary.vdb.chunk_vector_store import ChunkVectorStore
from docqa.core.exceptions import ChunkNotFoundError
from docqa.core.providers import Embedder

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Embed a single chunk and persist its vector."""

    def __init__(
        self,
        embedder: Embedder,
        vector_store: ChunkVectorStore,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """
        Initialize embedding task.

        Args:
            embedder: Document embedder
            vector_store: Store receiving the vector
            session_factory: Factory for short-lived sessions
        """
        self._embedder = embedder
        self._vector_store = vector_store
        self._session_factory = session_factory

    async def run(self, chunk_id: UUID) -> bool:
        """
        Embed a chunk.

        The provider call happens outside any open session so that no
        connection is held while waiting on the network.

        Args:
            chunk_id: Chunk to embed

        Returns:
            bool: True if an embedding was written, False if the chunk is gone

        Raises:
            ProviderError: Embedding call failed or timed out (retryable)
            ContractViolation: Provider returned the wrong dimension
        """
        async with self._session_factory() as session:
            chunk = await chunk_crud.get_by_id(session, chunk_id)
            content = chunk.content if chunk is not None else None

        if content is None:
            logger.info(
                f"{__name__}:run - Chunk not found, nothing to embed",
                extra={"chunk_id": str(chunk_id)},
            )
            return False

        vector = await run_in_threadpool(self._embedder.embed, content)

        async with self._session_factory() as session:
            try:
                await self._vector_store.set_embedding(session, chunk_id, vector)
            except ChunkNotFoundError:
                logger.info(
                    f"{__name__}:run - Chunk deleted while embedding, discarding vector",
                    extra={"chunk_id": str(chunk_id)},
                )
                await session.rollback()
                return False
            await session.commit()

        logger.info(
            f"{__name__}:run - Chunk embedded",
            extra={"chunk_id": str(chunk_id), "dimension": len(vector)},
        )
        return True
