"""
Dependency injection container.

Factory functions for FastAPI dependencies. Provider clients, the vector
store and the task queue are process-wide and cached in ServiceCache; services
are built per request around the request's database session.

Dependencies: docqa.configs, docqa.application, docqa.boundary, docqa.workers
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.application.services import DocumentService, QueryService
from docqa.boundary.db import get_async_db
from docqa.configs import get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._s3_client = None
        self._parsing_task = None
        self._chunking_task = None
        self._vector_store = None
        self._document_embedder = None
        self._query_embedder = None
        self._generator = None
        self._retriever = None
        self._task_queue = None

    @property
    def s3_client(self):
        """Get cached S3 document client."""
        if self._s3_client is None:
            from docqa.boundary.aws.s3_client import S3DocumentClient

            settings = get_settings()
            self._s3_client = S3DocumentClient(
                bucket=settings.s3_documents.bucket,
                region=settings.s3_documents.region,
            )
        return self._s3_client

    @property
    def parsing_task(self):
        """Get cached text extractor reading from the S3 client."""
        if self._parsing_task is None:
            from docqa.core.document_processing.tasks.parsing_task import ParsingTask

            self._parsing_task = ParsingTask(blob_store=self.s3_client)
        return self._parsing_task

    @property
    def chunking_task(self):
        """Get cached word-window chunker."""
        if self._chunking_task is None:
            from docqa.core.document_processing.tasks.chunking_task import ChunkingTask

            self._chunking_task = ChunkingTask(max_words=get_settings().rag.chunk_max_words)
        return self._chunking_task

    @property
    def vector_store(self):
        """Get cached chunk vector store."""
        if self._vector_store is None:
            from docqa.boundary.vdb.chunk_vector_store import ChunkVectorStore

            self._vector_store = ChunkVectorStore(dimension=get_settings().rag.embedding_dimension)
        return self._vector_store

    def _build_embedder(self, task_type: str, embeddings=None):
        from docqa.application.embedder import GeminiEmbedder

        rag = get_settings().rag
        return GeminiEmbedder(
            embeddings=embeddings,
            dimension=rag.embedding_dimension,
            timeout_seconds=rag.embedding_timeout_seconds,
            task_type=task_type,
            model=rag.embedding_model,
        )

    @property
    def document_embedder(self):
        """Get cached embedder for chunk content."""
        if self._document_embedder is None:
            from docqa.application.embedder import DOCUMENT_TASK

            self._document_embedder = self._build_embedder(DOCUMENT_TASK)
        return self._document_embedder

    @property
    def query_embedder(self):
        """Get cached embedder for questions, sharing the document client."""
        if self._query_embedder is None:
            from docqa.application.embedder import QUERY_TASK

            self._query_embedder = self._build_embedder(
                QUERY_TASK,
                embeddings=self.document_embedder.embeddings,
            )
        return self._query_embedder

    @property
    def generator(self):
        """Get cached answer generator."""
        if self._generator is None:
            from docqa.application.generator import GeminiGenerator

            rag = get_settings().rag
            self._generator = GeminiGenerator(
                model=rag.generation_model,
                temperature=rag.generation_temperature,
                timeout_seconds=rag.generation_timeout_seconds,
            )
        return self._generator

    @property
    def retriever(self):
        """Get cached retriever."""
        if self._retriever is None:
            from docqa.core.retriever import Retriever

            rag = get_settings().rag
            self._retriever = Retriever(
                vector_store=self.vector_store,
                max_distance=rag.max_distance,
                limit=rag.top_k,
            )
        return self._retriever

    @property
    def task_queue(self):
        """Get cached embedding task queue (Celery or in-process)."""
        if self._task_queue is None:
            settings = get_settings()
            if settings.celery.queue_backend == "inprocess":
                from docqa.boundary.db.connection import get_async_session_factory
                from docqa.core.document_processing.tasks.embedding_task import EmbeddingTask
                from docqa.workers.queue import InProcessTaskQueue

                self._task_queue = InProcessTaskQueue(
                    embedding_task=EmbeddingTask(
                        embedder=self.document_embedder,
                        vector_store=self.vector_store,
                        session_factory=get_async_session_factory(),
                    ),
                    max_retries=settings.celery.task_max_retries,
                    backoff=settings.celery.task_retry_backoff,
                    backoff_max=settings.celery.task_retry_backoff_max,
                )
            else:
                from docqa.workers.queue import CeleryTaskQueue

                self._task_queue = CeleryTaskQueue()
        return self._task_queue

    def clear(self) -> None:
        """Clear all cached instances."""
        self.__init__()


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        DocumentService: Document service bound to the request session
    """
    cache = get_service_cache()
    return DocumentService(
        db=db,
        blob_store=cache.s3_client,
        converter=cache.parsing_task,
        chunker=cache.chunking_task,
        vector_store=cache.vector_store,
        task_queue=cache.task_queue,
        key_prefix=get_settings().s3_documents.key_prefix,
    )


def get_query_service(db: AsyncSession = Depends(get_async_db)) -> QueryService:
    """
    Get query service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        QueryService: Query service bound to the request session
    """
    cache = get_service_cache()
    return QueryService(
        db=db,
        embedder=cache.query_embedder,
        retriever=cache.retriever,
        generator=cache.generator,
        enforce_access_scope=get_settings().rag.enforce_access_scope,
    )
