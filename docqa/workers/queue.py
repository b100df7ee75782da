"""
Task queue implementations.

CeleryTaskQueue hands embedding work to Celery workers. InProcessTaskQueue
runs the same EmbeddingTask on the current event loop with an equivalent
retry policy (tenacity), for local development and tests.

Dependencies: celery, tenacity, docqa.core.document_processing
System role: Embedding task dispatch
"""

import asyncio
import logging
from uuid import UUID

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from docqa.core.document_processing.models import EmbedChunkTask
from docqa.core.document_processing.tasks.embedding_task import EmbeddingTask
from docqa.core.exceptions import ProviderError
from docqa.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


class CeleryTaskQueue:
    """Dispatch embedding tasks to Celery, carrying the caller's correlation ID."""

    def enqueue(self, task: EmbedChunkTask) -> None:
        from docqa.workers.tasks.embedding import embed_chunk

        embed_chunk.delay(str(task.chunk_id), correlation_id=get_correlation_id() or None)


class InProcessTaskQueue:
    """
    Run embedding tasks as asyncio tasks on the running loop.

    Failures after the last retry are logged and recorded in `failures`;
    nothing is raised to the request that enqueued the work.
    """

    def __init__(
        self,
        embedding_task: EmbeddingTask,
        max_retries: int = 5,
        backoff: float = 10.0,
        backoff_max: float = 600.0,
    ) -> None:
        """
        Initialize in-process queue.

        Args:
            embedding_task: Task executed per chunk
            max_retries: Retries after the first attempt on ProviderError
            backoff: Initial backoff in seconds
            backoff_max: Backoff ceiling in seconds
        """
        self._embedding_task = embedding_task
        self._max_retries = max_retries
        self._backoff = backoff
        self._backoff_max = backoff_max
        self._pending: set[asyncio.Task] = set()
        self.failures: dict[UUID, Exception] = {}

    def enqueue(self, task: EmbedChunkTask) -> None:
        job = asyncio.get_running_loop().create_task(self._run(task.chunk_id))
        self._pending.add(job)
        job.add_done_callback(self._pending.discard)

    async def join(self) -> None:
        """Wait until every enqueued task has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _run(self, chunk_id: UUID) -> None:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(ProviderError),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential_jitter(initial=self._backoff, max=self._backoff_max),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:_run - Retry {retry_state.attempt_number}/{self._max_retries}",
                extra={"chunk_id": str(chunk_id)},
            ),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await self._embedding_task.run(chunk_id)
        except Exception as e:
            self.failures[chunk_id] = e
            logger.exception(
                f"{__name__}:_run - Embedding failed permanently",
                extra={"chunk_id": str(chunk_id), "error_type": type(e).__name__},
            )
