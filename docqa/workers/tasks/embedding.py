"""
Chunk embedding Celery task.

Async task: embed_chunk(chunk_id)
Flow: load chunk -> embed -> write vector -> commit

Retries on ProviderError with exponential backoff and jitter. A missing chunk
completes successfully without work. ContractViolation is not retried.

Dependencies: celery, docqa.application, docqa.boundary, docqa.workers
System role: Async chunk embedding task
"""

import asyncio
import logging
from functools import lru_cache
from uuid import UUID

from docqa.application.embedder import DOCUMENT_TASK, GeminiEmbedder
from docqa.boundary.db.connection import build_session_factory, create_engine_from_settings
from docqa.boundary.vdb.chunk_vector_store import ChunkVectorStore
from docqa.configs import get_settings
from docqa.core.document_processing.tasks.embedding_task import EmbeddingTask
from docqa.core.exceptions import ProviderError
from docqa.observability.correlation import correlation_scope
from docqa.workers import celery_app, celery_config

logger = logging.getLogger(__name__)


@lru_cache
def get_worker_embedder() -> GeminiEmbedder:
    """Embedder shared by every task run in this worker process."""
    rag = get_settings().rag
    return GeminiEmbedder(
        dimension=rag.embedding_dimension,
        timeout_seconds=rag.embedding_timeout_seconds,
        task_type=DOCUMENT_TASK,
        model=rag.embedding_model,
    )


async def run_embedding(chunk_id: UUID) -> bool:
    """
    Run EmbeddingTask on an engine private to this event loop.

    Returns:
        bool: True if an embedding was written
    """
    engine = create_engine_from_settings()
    try:
        task = EmbeddingTask(
            embedder=get_worker_embedder(),
            vector_store=ChunkVectorStore(get_settings().rag.embedding_dimension),
            session_factory=build_session_factory(engine),
        )
        return await task.run(chunk_id)
    finally:
        await engine.dispose()


@celery_app.task(
    bind=True,
    max_retries=celery_config.task_max_retries,
    autoretry_for=(ProviderError,),
    retry_backoff=celery_config.task_retry_backoff,
    retry_backoff_max=celery_config.task_retry_backoff_max,
    retry_jitter=True,
    acks_late=True,
)
def embed_chunk(self, chunk_id: str, correlation_id: str | None = None) -> dict:
    """
    Embed one chunk asynchronously.

    Args:
        chunk_id: Chunk UUID as string
        correlation_id: ID of the request that enqueued the chunk

    Returns:
        dict: chunk_id and whether an embedding was written
    """
    with correlation_scope(correlation_id):
        logger.info(
            f"{__name__}:embed_chunk - START",
            extra={"chunk_id": chunk_id, "attempt": self.request.retries + 1},
        )
        embedded = asyncio.run(run_embedding(UUID(chunk_id)))
    return {"chunk_id": chunk_id, "embedded": embedded}
