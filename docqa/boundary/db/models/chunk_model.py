"""
Chunk ORM model.

An ordered segment of a document's extracted text together with its
embedding. The embedding column is a pgvector VECTOR sized from RAGSettings
and stays NULL until the asynchronous embedding task writes it.

Dependencies: sqlalchemy, pgvector, docqa.boundary.db.base, docqa.configs
System role: Chunk and embedding persistence for nearest-neighbor search
"""

import uuid

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docqa.boundary.db.base import Base, TimestampMixin, UUIDMixin
from docqa.configs import get_settings

EMBEDDING_DIMENSION = get_settings().rag.embedding_dimension


class ChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Chunk ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Owning DocumentModel (ON DELETE CASCADE)
        chunk_index: Zero-based position in the document, contiguous per document
        content: Non-empty chunk text
        embedding: Fixed-dimension vector, NULL until embedded

    Constraints:
        (document_id, chunk_index): UNIQUE
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunks_document_index"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    embedding = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=True)

    # Relationships
    document = relationship("DocumentModel", back_populates="chunks")

    @property
    def is_embedded(self) -> bool:
        """Whether the embedding step has completed for this chunk."""
        return self.embedding is not None
