"""
Test suite for the embed_chunk Celery task.

System role: Verification of worker task wiring
"""

import logging
import uuid
from unittest.mock import AsyncMock, patch

from docqa.core.exceptions import ProviderError
from docqa.observability.correlation import get_correlation_id
from docqa.workers import celery_app, celery_config, configure_worker_logging, settings
from docqa.workers.tasks.embedding import embed_chunk


class TestEmbedChunkTask:
    """Test suite for embed_chunk."""

    def test_task_should_be_registered(self) -> None:
        assert embed_chunk.name in celery_app.tasks

    def test_task_should_retry_only_provider_errors(self) -> None:
        assert embed_chunk.autoretry_for == (ProviderError,)
        assert embed_chunk.acks_late is True
        assert embed_chunk.retry_jitter is True
        assert embed_chunk.max_retries == celery_config.task_max_retries

    def test_run_should_embed_chunk(self) -> None:
        chunk_id = uuid.uuid4()

        with patch("docqa.workers.tasks.embedding.run_embedding", new=AsyncMock(return_value=True)) as run:
            result = embed_chunk.run(str(chunk_id))

        assert result == {"chunk_id": str(chunk_id), "embedded": True}
        run.assert_awaited_once_with(chunk_id)

    def test_run_should_report_missing_chunk(self) -> None:
        chunk_id = str(uuid.uuid4())

        with patch("docqa.workers.tasks.embedding.run_embedding", new=AsyncMock(return_value=False)):
            result = embed_chunk.run(chunk_id)

        assert result["embedded"] is False

    def test_run_should_log_under_enqueuing_correlation_id(self) -> None:
        seen: list[str] = []

        async def record(chunk_id):
            seen.append(get_correlation_id())
            return True

        with patch("docqa.workers.tasks.embedding.run_embedding", new=record):
            embed_chunk.run(str(uuid.uuid4()), correlation_id="upload-3")

        assert seen == ["upload-3"]
        assert get_correlation_id() == ""


class TestWorkerLogging:
    """Test suite for the Celery logging hook."""

    def test_worker_logging_should_use_configured_level(self) -> None:
        root = logging.getLogger()
        previous_handlers, previous_level = root.handlers[:], root.level

        try:
            with patch.object(settings, "log_level", "WARNING"):
                configure_worker_logging()

            assert root.level == logging.WARNING
            assert len(root.handlers) == 1
        finally:
            root.handlers[:] = previous_handlers
            root.setLevel(previous_level)
