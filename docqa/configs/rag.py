"""
Retrieval-augmented generation settings.

Embedding provider, generation provider, chunking and retrieval parameters.
The distance threshold is tuned for cosine distance in [0, 2].

Dependencies: pydantic, pydantic_settings
System role: RAG pipeline configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RAGSettings(BaseSettings):
    """Embedding, generation, chunking and retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAG_",
        case_sensitive=False,
        extra="ignore",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        ge=1,
        description="Embedding vector dimension (must match the chunk table column)",
    )
    embedding_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single embedding call",
    )

    generation_model: str = Field(
        default="gemini-2.5-flash-lite",
        description="Google Gemini chat model used for answer synthesis",
    )
    generation_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for answer synthesis",
    )
    generation_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for a single generation call",
    )

    chunk_max_words: int = Field(
        default=500,
        ge=1,
        description="Number of whitespace-separated words per chunk",
    )

    max_distance: float = Field(
        default=0.6,
        gt=0.0,
        le=2.0,
        description="Chunks at or beyond this cosine distance are not retrieved",
    )
    top_k: int = Field(default=5, ge=1, le=100, description="Maximum chunks passed as context")

    enforce_access_scope: bool = Field(
        default=True,
        description="Restrict retrieval to documents whose allowed_* lists admit the asker",
    )
