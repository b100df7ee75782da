"""
Test suite for the Gemini embedder, the Gemini generator and their clients.

LangChain clients are replaced with mocks or built offline with a dummy key;
no network calls are made.

System role: Verification of provider adapters
"""

from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage

from docqa.application.embedder import DOCUMENT_TASK, QUERY_TASK, GeminiEmbedder
from docqa.application.generator import GeminiGenerator
from docqa.core.document_processing.embeddings_wrapper import FixedDimensionEmbeddings
from docqa.core.exceptions import ContractViolation, ProviderError


@pytest.fixture
def mock_embeddings() -> MagicMock:
    embeddings = MagicMock()
    embeddings.embed_query.return_value = [0.5] * 768
    return embeddings


@pytest.fixture
def gemini_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Dummy Gemini Developer API key so clients build without network access."""
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.delenv("GOOGLE_GENAI_USE_VERTEXAI", raising=False)


class TestGeminiEmbedder:
    """Test suite for GeminiEmbedder."""

    def test_embed_should_return_vector_with_task_type(self, mock_embeddings: MagicMock) -> None:
        # Arrange
        embedder = GeminiEmbedder(embeddings=mock_embeddings, task_type=QUERY_TASK)

        # Act
        vector = embedder.embed("what is the leave policy?")

        # Assert
        assert len(vector) == 768
        mock_embeddings.embed_query.assert_called_once_with(
            "what is the leave policy?", task_type=QUERY_TASK
        )

    def test_embed_should_default_to_document_task(self, mock_embeddings: MagicMock) -> None:
        GeminiEmbedder(embeddings=mock_embeddings).embed("chunk text")

        assert mock_embeddings.embed_query.call_args.kwargs["task_type"] == DOCUMENT_TASK

    def test_embed_should_raise_contract_violation_for_wrong_dimension(
        self, mock_embeddings: MagicMock
    ) -> None:
        mock_embeddings.embed_query.return_value = [0.1] * 3072

        with pytest.raises(ContractViolation) as exc_info:
            GeminiEmbedder(embeddings=mock_embeddings).embed("text")

        assert exc_info.value.expected_dimension == 768
        assert exc_info.value.actual_dimension == 3072

    def test_embed_should_wrap_client_errors(self, mock_embeddings: MagicMock) -> None:
        mock_embeddings.embed_query.side_effect = ConnectionError("reset by peer")

        with pytest.raises(ProviderError) as exc_info:
            GeminiEmbedder(embeddings=mock_embeddings).embed("text")

        assert exc_info.value.provider == "embedding"
        assert exc_info.value.retryable is True

    def test_embeddings_property_should_expose_client(self, mock_embeddings: MagicMock) -> None:
        assert GeminiEmbedder(embeddings=mock_embeddings).embeddings is mock_embeddings

    def test_default_client_should_carry_dimension_and_timeout(self, gemini_env) -> None:
        embedder = GeminiEmbedder(dimension=768, timeout_seconds=5)

        client = embedder.embeddings
        assert isinstance(client, FixedDimensionEmbeddings)
        assert client.output_dimensionality == 768
        assert client.request_timeout == 5


class TestFixedDimensionEmbeddings:
    """Test suite for FixedDimensionEmbeddings."""

    def test_output_dimensionality_should_be_library_field(self, gemini_env) -> None:
        embeddings = FixedDimensionEmbeddings(output_dimensionality=768)

        assert embeddings.output_dimensionality == 768
        assert isinstance(embeddings.output_dimensionality, int)

    def test_build_config_should_attach_request_timeout(self, gemini_env) -> None:
        embeddings = FixedDimensionEmbeddings(output_dimensionality=768, request_timeout=2.5)

        config = embeddings._build_config(task_type="RETRIEVAL_QUERY", output_dimensionality=768)

        assert config.http_options.timeout == 2500
        assert config.http_options.retry_options is None
        assert config.output_dimensionality == 768

    def test_build_config_should_leave_timeout_unset_by_default(self, gemini_env) -> None:
        config = FixedDimensionEmbeddings()._build_config(task_type="RETRIEVAL_QUERY")

        assert config.http_options is None

    def test_embed_query_should_send_dimension_and_timeout(self, gemini_env) -> None:
        # Arrange
        embeddings = FixedDimensionEmbeddings(output_dimensionality=768, request_timeout=5)
        client = MagicMock()
        client.models.embed_content.return_value.embeddings = [MagicMock(values=[0.1] * 768)]
        embeddings.client = client

        # Act
        vector = embeddings.embed_query("when is payday?", task_type=QUERY_TASK)

        # Assert
        assert len(vector) == 768
        config = client.models.embed_content.call_args.kwargs["config"]
        assert config.output_dimensionality == 768
        assert config.task_type == QUERY_TASK
        assert config.http_options.timeout == 5000


class TestGeminiGenerator:
    """Test suite for GeminiGenerator."""

    def test_generate_should_return_stripped_text(self) -> None:
        llm = MagicMock()
        llm.invoke.return_value = AIMessage(content="  Annual leave is 20 days.  ")

        answer = GeminiGenerator(llm=llm).generate("prompt")

        assert answer == "Annual leave is 20 days."
        llm.invoke.assert_called_once_with("prompt")

    def test_generate_should_join_text_parts(self) -> None:
        llm = MagicMock()
        llm.invoke.return_value = AIMessage(
            content=[{"type": "text", "text": "Part one. "}, "Part two."]
        )

        assert GeminiGenerator(llm=llm).generate("prompt") == "Part one. Part two."

    def test_generate_should_reject_empty_completion(self) -> None:
        llm = MagicMock()
        llm.invoke.return_value = AIMessage(content="   ")

        with pytest.raises(ProviderError):
            GeminiGenerator(llm=llm).generate("prompt")

    def test_generate_should_wrap_client_errors(self) -> None:
        llm = MagicMock()
        llm.invoke.side_effect = RuntimeError("429 quota exceeded")

        with pytest.raises(ProviderError) as exc_info:
            GeminiGenerator(llm=llm).generate("prompt")

        assert exc_info.value.provider == "generation"

    def test_default_client_should_make_single_attempt_with_timeout(self, gemini_env) -> None:
        generator = GeminiGenerator(timeout_seconds=5)

        assert generator._llm.max_retries == 1
        assert generator._llm.timeout == 5
