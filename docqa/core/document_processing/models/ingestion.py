"""
Ingestion pipeline models.

Defines the embedding work item dispatched per chunk, the result of a
synchronous ingestion run and the derived per-document ingestion state.

Dependencies: pydantic
System role: Data structures passed between orchestrator, queue and workers
"""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class IngestionState(str, Enum):
    """
    Per-document ingestion state, derived from chunk embedding progress.

    UploadAccepted and TextExtracted are transient inside a single request;
    persisted documents are always in one of the states below.
    """

    CHUNKED = "chunked"
    PARTIALLY_EMBEDDED = "partially_embedded"
    FULLY_EMBEDDED = "fully_embedded"

    @classmethod
    def from_counts(cls, chunk_count: int, embedded_count: int) -> "IngestionState":
        """
        Derive the state from chunk and embedded counts.

        A document without chunks has nothing to embed and stays CHUNKED.
        """
        if chunk_count == 0 or embedded_count == 0:
            return cls.CHUNKED
        if embedded_count < chunk_count:
            return cls.PARTIALLY_EMBEDDED
        return cls.FULLY_EMBEDDED


class EmbedChunkTask(BaseModel):
    """Work item asking a worker to embed one chunk."""

    model_config = ConfigDict(frozen=True)

    chunk_id: UUID = Field(description="Chunk to embed")


class IngestionResult(BaseModel):
    """Outcome of a create or file-replacing update."""

    document_id: UUID = Field(description="Ingested document")
    file_path: str = Field(description="Blob store path of the stored file")
    chunk_ids: list[UUID] = Field(default_factory=list, description="Created chunks in index order")

    @property
    def chunk_count(self) -> int:
        return len(self.chunk_ids)
