"""
Test suite for QueryService.

Ingests real chunks into the in-memory database with vectors chosen by a fake
embedder, then verifies retrieval, prompt assembly and the no-context path.

System role: Verification of query orchestration
"""

from unittest.mock import MagicMock

import pytest

from docqa.application.services.query_service import QueryService
from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.core.exceptions import ProviderError, ValidationError
from docqa.core.rag.schemas import AccessScope, ConversationMessage
from docqa.core.retriever import Retriever


@pytest.fixture
def generator() -> MagicMock:
    mock = MagicMock()
    mock.generate.return_value = "Grounded answer."
    return mock


@pytest.fixture
def query_service(test_async_db, first_word_embedder, vector_store, generator) -> QueryService:
    return QueryService(
        db=test_async_db,
        embedder=first_word_embedder,
        retriever=Retriever(vector_store, max_distance=0.6, limit=5),
        generator=generator,
    )


async def _add_document(session, vector_store, title, contents, vectors, **labels):
    document = await document_crud.create(session, title=title, file_path=f"/rag_files/1_{title}.txt", **labels)
    for index, (content, vector) in enumerate(zip(contents, vectors)):
        chunk_id = await vector_store.put_chunk(session, document.id, index, content)
        if vector is not None:
            await vector_store.set_embedding(session, chunk_id, vector)
    await session.commit()
    return document


class TestQueryServiceAnswer:
    """Test suite for QueryService.answer()."""

    async def test_answer_should_rank_closest_chunk_first(
        self,
        query_service,
        test_async_db,
        vector_store,
        first_word_embedder,
        generator,
        make_axis_vector,
        make_vector_at_distance,
    ) -> None:
        # Arrange: 1200 words chunk into 500/500/200; only the last chunk is close
        words = [f"w{i}" for i in range(1200)]
        contents = [" ".join(words[0:500]), " ".join(words[500:1000]), " ".join(words[1000:1200])]
        document = await _add_document(
            test_async_db,
            vector_store,
            "report",
            contents,
            [make_axis_vector(10), make_axis_vector(11), make_vector_at_distance(0, 1, 0.3)],
        )
        first_word_embedder.vectors["When"] = make_axis_vector(0)

        # Act
        result = await query_service.answer("When is the report due?")

        # Assert
        assert result.answer == "Grounded answer."
        assert len(result.contexts) == 1
        top = result.contexts[0]
        assert top.number == 1
        assert top.document_id == document.id
        assert top.chunk_index == 2
        assert top.distance == pytest.approx(0.3, abs=1e-6)

        prompt = generator.generate.call_args.args[0]
        assert "Context 1:\nw1000 w1001" in prompt
        assert prompt.index("Answer:") > prompt.index("Relevant Knowledge Context:")
        assert "User's New Question:\nWhen is the report due?" in prompt

    async def test_answer_should_return_none_without_calling_generator(
        self, query_service, test_async_db, vector_store, first_word_embedder, generator, make_axis_vector
    ) -> None:
        await _add_document(test_async_db, vector_store, "far", ["far away"], [make_axis_vector(5)])
        first_word_embedder.vectors["Unrelated"] = make_axis_vector(0)

        result = await query_service.answer("Unrelated question")

        assert result is None
        generator.generate.assert_not_called()

    async def test_answer_should_ignore_unembedded_chunks(
        self, query_service, test_async_db, vector_store, first_word_embedder, generator, make_axis_vector
    ) -> None:
        await _add_document(test_async_db, vector_store, "pending", ["pending chunk"], [None])
        first_word_embedder.vectors["pending"] = make_axis_vector(0)

        assert await query_service.answer("pending question") is None
        generator.generate.assert_not_called()

    async def test_answer_should_include_history_in_prompt(
        self, query_service, test_async_db, vector_store, first_word_embedder, generator, make_axis_vector
    ) -> None:
        await _add_document(test_async_db, vector_store, "leave", ["Leave is 20 days."], [make_axis_vector(0)])
        first_word_embedder.vectors["And"] = make_axis_vector(0)
        history = [
            ConversationMessage(role="user", content="How much leave?"),
            ConversationMessage(role="assistant", content="20 days."),
        ]

        await query_service.answer("And sick leave?", history)

        prompt = generator.generate.call_args.args[0]
        assert "User: How much leave?\nAssistant: 20 days.\n" in prompt

    async def test_answer_should_filter_by_scope(
        self, query_service, test_async_db, vector_store, first_word_embedder, make_axis_vector
    ) -> None:
        # Arrange
        perth = await _add_document(
            test_async_db, vector_store, "perth", ["Perth roster"], [make_axis_vector(0)],
            allowed_locations=["Perth"],
        )
        open_doc = await _add_document(
            test_async_db, vector_store, "open", ["Open roster"], [make_axis_vector(0)],
        )
        first_word_embedder.vectors["roster?"] = make_axis_vector(0)

        # Act
        sydney = await query_service.answer("roster?", scope=AccessScope(location="Sydney"))
        everyone = await query_service.answer("roster?")

        # Assert
        assert {c.document_id for c in sydney.contexts} == {open_doc.id}
        assert {c.document_id for c in everyone.contexts} == {perth.id, open_doc.id}

    async def test_answer_should_skip_embedding_when_scope_excludes_all(
        self, query_service, test_async_db, vector_store, first_word_embedder, generator, make_axis_vector
    ) -> None:
        await _add_document(
            test_async_db, vector_store, "secret", ["Secret"], [make_axis_vector(0)],
            allowed_positions=["Director"],
        )

        result = await query_service.answer("Secret?", scope=AccessScope(position="Nurse"))

        assert result is None
        assert first_word_embedder.calls == []
        generator.generate.assert_not_called()

    @pytest.mark.parametrize("question", ["", "   "])
    async def test_answer_should_reject_blank_question(self, query_service, question) -> None:
        with pytest.raises(ValidationError):
            await query_service.answer(question)

    async def test_answer_should_propagate_provider_error(
        self, query_service, test_async_db, vector_store, first_word_embedder, generator, make_axis_vector
    ) -> None:
        await _add_document(test_async_db, vector_store, "doc", ["content"], [make_axis_vector(0)])
        first_word_embedder.vectors["q"] = make_axis_vector(0)
        generator.generate.side_effect = ProviderError("quota", provider="generation")

        with pytest.raises(ProviderError):
            await query_service.answer("q")

    async def test_answer_should_not_modify_stored_chunks(
        self, query_service, test_async_db, vector_store, first_word_embedder, make_axis_vector
    ) -> None:
        document = await _add_document(test_async_db, vector_store, "doc", ["content"], [make_axis_vector(0)])
        first_word_embedder.vectors["content"] = make_axis_vector(0)

        await query_service.answer("content question")

        assert await chunk_crud.count_embedded_by_document_id(test_async_db, document.id) == 1
