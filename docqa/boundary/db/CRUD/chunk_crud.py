"""
Chunk CRUD operations.

Provides per-document chunk queries: ordered listing, counting, embedding
progress and bulk deletion.

Dependencies: sqlalchemy, docqa.boundary.db.models.chunk_model
System role: Chunk persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.models.chunk_model import ChunkModel
from docqa.boundary.db.CRUD.base_crud import BaseCRUD


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """
    CRUD operations for ChunkModel.

    Extends BaseCRUD with queries scoped to a parent document.
    """

    def __init__(self) -> None:
        """Initialize ChunkCRUD with ChunkModel."""
        super().__init__(ChunkModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChunkModel]:
        """
        Retrieve all chunks of a document in index order.

        Args:
            session: Async database session
            document_id: Parent document UUID

        Returns:
            Sequence of ChunkModels ordered by chunk_index
        """
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == document_id)
            .order_by(ChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_document_id(self, session: AsyncSession, document_id: UUID) -> int:
        """Count chunks belonging to a document."""
        stmt = select(func.count(ChunkModel.id)).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def count_embedded_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> int:
        """Count chunks of a document whose embedding has been written."""
        stmt = select(func.count(ChunkModel.id)).where(
            ChunkModel.document_id == document_id,
            ChunkModel.embedding.is_not(None),
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def delete_by_document_id(self, session: AsyncSession, document_id: UUID) -> int:
        """
        Delete every chunk of a document.

        Args:
            session: Async database session
            document_id: Parent document UUID

        Returns:
            Number of deleted rows
        """
        stmt = delete(ChunkModel).where(ChunkModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount


chunk_crud = ChunkCRUD()
