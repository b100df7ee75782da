"""
Document ORM model.

Represents an uploaded source file, its blob store path and the access-scope
labels that restrict who may retrieve chunks derived from it.

Dependencies: sqlalchemy, docqa.boundary.db.base
System role: Document persistence for ingestion and access scoping
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docqa.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Lifecycle: created on successful upload; replacing the file deletes and
    regenerates every chunk; deleting the document cascades to its chunks.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Human readable title (255 char limit)
        file_path: Blob store path of the raw file (set before any chunk exists)
        allowed_locations: Location labels allowed to retrieve; None = unrestricted
        allowed_positions: Position labels allowed to retrieve; None = unrestricted
        allowed_websites: Website labels allowed to retrieve; None = unrestricted
        created_at: Upload timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        chunks: Owned ChunkModel rows ordered by chunk_index
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    file_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Blob store path for the raw document",
    )

    allowed_locations: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    allowed_positions: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    allowed_websites: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    # Relationships
    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ChunkModel.chunk_index",
    )
