"""
Gemini embeddings pinned to the chunk vector dimension.

The dimension is set on the library's output_dimensionality field so every
sync and async call requests it. The google-genai client only honours a
timeout attached to each request, so one is added to every embed config.
Task type is chosen per call by the caller.

Dependencies: langchain_google_genai, google-genai
System role: Embedding model client for ingestion and queries
"""

import logging

from google.genai.types import EmbedContentConfig, HttpOptions
from langchain_google_genai import GoogleGenerativeAIEmbeddings
from pydantic import Field

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings with a fixed dimension and a per-request timeout."""

    request_timeout: float | None = Field(default=None)
    """Seconds to wait for each embed request; None waits indefinitely."""

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        super().__init__(model=model, output_dimensionality=output_dimensionality, **kwargs)
        logger.info(
            f"{__name__}:__init__ - model={model}, output_dimensionality={output_dimensionality}, "
            f"request_timeout={self.request_timeout}"
        )

    def _build_config(self, **kwargs) -> EmbedContentConfig:
        config = super()._build_config(**kwargs)
        if self.request_timeout is not None:
            config.http_options = HttpOptions(timeout=int(self.request_timeout * 1000))
        return config
