"""
Gemini embedding adapter.

Embeds text with gemini-embedding-001 through FixedDimensionEmbeddings and
enforces the configured dimensionality on every returned vector. Each call is
a single request bounded by the client timeout; retries belong to the worker.

Dependencies: langchain-google-genai, docqa.core.document_processing.embeddings_wrapper
System role: Embedding provider adapter
"""

import logging

from langchain_core.embeddings import Embeddings

from docqa.core.document_processing.embeddings_wrapper import FixedDimensionEmbeddings
from docqa.core.exceptions import ContractViolation, ProviderError

logger = logging.getLogger(__name__)

DOCUMENT_TASK = "RETRIEVAL_DOCUMENT"
QUERY_TASK = "RETRIEVAL_QUERY"


class GeminiEmbedder:
    """Gemini embedding generator."""

    def __init__(
        self,
        embeddings: Embeddings | None = None,
        dimension: int = 768,
        timeout_seconds: float = 30.0,
        task_type: str = DOCUMENT_TASK,
        model: str = "models/gemini-embedding-001",
    ) -> None:
        """
        Initialize Gemini embeddings client.

        Args:
            embeddings: LangChain embeddings client (created if None)
            dimension: Required vector length
            timeout_seconds: Per-request timeout passed to the client
            task_type: RETRIEVAL_DOCUMENT for chunks, RETRIEVAL_QUERY for questions
            model: Gemini embedding model ID (used when embeddings is None)
        """
        self.dimension = dimension
        self._task_type = task_type
        self._embeddings = embeddings or FixedDimensionEmbeddings(
            model=model,
            output_dimensionality=dimension,
            request_timeout=timeout_seconds,
        )

    @property
    def embeddings(self) -> Embeddings:
        """Underlying LangChain embeddings client."""
        return self._embeddings

    def embed(self, text: str) -> list[float]:
        """
        Generate embedding for text.

        Args:
            text: Chunk content or question

        Returns:
            list[float]: Vector of exactly `dimension` components

        Raises:
            ProviderError: Provider failure or timeout (retryable)
            ContractViolation: Provider returned a vector of another length
        """
        try:
            vector = self._embeddings.embed_query(text, task_type=self._task_type)
        except Exception as e:
            logger.error(
                f"{__name__}:embed - Embedding call failed",
                extra={"error": str(e), "error_type": type(e).__name__, "text_length": len(text)},
            )
            raise ProviderError(f"Embedding failed: {e}", provider="embedding") from e

        if len(vector) != self.dimension:
            logger.error(
                f"{__name__}:embed - Provider returned wrong dimension",
                extra={"expected": self.dimension, "actual": len(vector)},
            )
            raise ContractViolation(expected_dimension=self.dimension, actual_dimension=len(vector))

        return [float(v) for v in vector]
