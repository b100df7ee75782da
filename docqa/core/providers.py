"""
Capability interfaces consumed by the core and application layers.

Concrete adapters live in docqa.application (Gemini), docqa.boundary (S3,
pgvector) and docqa.workers (task queues). Tests substitute fakes.

Dependencies: typing
System role: Seams between RAG logic and external providers
"""

from typing import Protocol, runtime_checkable

from docqa.core.document_processing.models import EmbedChunkTask


@runtime_checkable
class Embedder(Protocol):
    """Maps text to a fixed-dimension vector."""

    dimension: int

    def embed(self, text: str) -> list[float]:
        ...


@runtime_checkable
class Generator(Protocol):
    """Produces a completion for a fully assembled prompt."""

    def generate(self, prompt: str) -> str:
        ...


@runtime_checkable
class BlobStore(Protocol):
    """Stores and returns raw document bytes by path."""

    def put(self, data: bytes, path: str) -> str:
        ...

    def get(self, path: str) -> bytes:
        ...


@runtime_checkable
class DocumentConverter(Protocol):
    """Extracts plain text from a stored document; None for unsupported types."""

    def extract(self, path: str) -> str | None:
        ...


@runtime_checkable
class TaskQueue(Protocol):
    """Dispatches background embedding work."""

    def enqueue(self, task: EmbedChunkTask) -> None:
        ...
