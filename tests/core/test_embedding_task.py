"""
Test suite for EmbeddingTask.

System role: Verification of the per-chunk embedding stage
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.core.document_processing.tasks.embedding_task import EmbeddingTask
from docqa.core.exceptions import ChunkNotFoundError, ContractViolation, ProviderError


@pytest.fixture
def embedding_task(first_word_embedder, vector_store, test_session_factory) -> EmbeddingTask:
    return EmbeddingTask(
        embedder=first_word_embedder,
        vector_store=vector_store,
        session_factory=test_session_factory,
    )


@pytest.fixture
async def stored_chunk_id(test_async_db, vector_store, sample_document) -> uuid.UUID:
    chunk_id = await vector_store.put_chunk(test_async_db, sample_document.id, 0, "holiday entitlement")
    await test_async_db.commit()
    return chunk_id


class TestEmbeddingTaskRun:
    """Test suite for EmbeddingTask.run()."""

    async def test_run_should_write_embedding(
        self, embedding_task, stored_chunk_id, first_word_embedder, test_async_db, vector_store, make_axis_vector
    ) -> None:
        # Arrange
        first_word_embedder.vectors["holiday"] = make_axis_vector(4)

        # Act
        written = await embedding_task.run(stored_chunk_id)

        # Assert
        assert written is True
        assert first_word_embedder.calls == ["holiday entitlement"]
        results = await vector_store.nearest(test_async_db, make_axis_vector(4), max_distance=0.1, limit=1)
        assert [r.chunk_id for r in results] == [stored_chunk_id]

    async def test_run_should_be_repeatable(
        self, embedding_task, stored_chunk_id, test_async_db, sample_document
    ) -> None:
        assert await embedding_task.run(stored_chunk_id) is True
        assert await embedding_task.run(stored_chunk_id) is True

        assert await chunk_crud.count_embedded_by_document_id(test_async_db, sample_document.id) == 1

    async def test_run_should_noop_for_missing_chunk(self, embedding_task, first_word_embedder) -> None:
        assert await embedding_task.run(uuid.uuid4()) is False
        assert first_word_embedder.calls == []

    async def test_run_should_propagate_provider_error(
        self, vector_store, test_session_factory, stored_chunk_id
    ) -> None:
        embedder = MagicMock()
        embedder.embed.side_effect = ProviderError("timeout", provider="embedding")
        task = EmbeddingTask(embedder, vector_store, test_session_factory)

        with pytest.raises(ProviderError):
            await task.run(stored_chunk_id)

    async def test_run_should_reject_wrong_dimension(
        self, vector_store, test_session_factory, stored_chunk_id, test_async_db, sample_document
    ) -> None:
        embedder = MagicMock()
        embedder.embed.return_value = [1.0] * 10
        task = EmbeddingTask(embedder, vector_store, test_session_factory)

        with pytest.raises(ContractViolation):
            await task.run(stored_chunk_id)

        assert await chunk_crud.count_embedded_by_document_id(test_async_db, sample_document.id) == 0

    async def test_run_should_noop_when_chunk_deleted_before_run(
        self, vector_store, test_session_factory, stored_chunk_id, sample_document
    ) -> None:
        # Arrange
        async with test_session_factory() as session:
            await vector_store.delete_chunks_of(session, sample_document.id)
            await session.commit()
        embedder = MagicMock()
        task = EmbeddingTask(embedder, vector_store, test_session_factory)

        # Act
        written = await task.run(stored_chunk_id)

        # Assert
        assert written is False
        embedder.embed.assert_not_called()

    async def test_run_should_discard_vector_when_chunk_deleted_meanwhile(
        self, test_session_factory, stored_chunk_id
    ) -> None:
        embedder = MagicMock()
        embedder.embed.return_value = [1.0] * 768
        store = MagicMock()
        store.set_embedding = AsyncMock(side_effect=ChunkNotFoundError(stored_chunk_id))
        task = EmbeddingTask(embedder, store, test_session_factory)

        written = await task.run(stored_chunk_id)

        assert written is False
        embedder.embed.assert_called_once_with("holiday entitlement")
