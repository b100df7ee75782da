"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel with
document-specific queries used by access scoping.

Dependencies: sqlalchemy, docqa.boundary.db.models.document_model
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.models.document_model import DocumentModel
from docqa.boundary.db.CRUD.base_crud import BaseCRUD


def _search_clause(search: str):
    """Title contains `search` (LIKE wildcards escaped), or id equals it when it is a UUID."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    clause = DocumentModel.title.ilike(f"%{escaped}%", escape="\\")
    try:
        return or_(clause, DocumentModel.id == UUID(search))
    except ValueError:
        return clause


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with the access-label projection consumed by the
    query service when building the eligible document set.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_page(
        self,
        session: AsyncSession,
        limit: int = 20,
        offset: int = 0,
        search: str | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents newest first.

        Args:
            session: Async database session
            limit: Maximum number of documents to return
            offset: Number of documents to skip
            search: Optional title substring (case-insensitive) or exact document id

        Returns:
            Sequence of DocumentModels ordered by created_at descending
        """
        stmt = (
            select(DocumentModel)
            .order_by(DocumentModel.created_at.desc(), DocumentModel.id)
            .offset(offset)
            .limit(limit)
        )
        if search:
            stmt = stmt.where(_search_clause(search))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_matching(self, session: AsyncSession, search: str | None = None) -> int:
        """Count documents matched by `search`, or all documents when it is empty."""
        if not search:
            return await self.count(session)
        stmt = select(func.count()).select_from(DocumentModel).where(_search_clause(search))
        result = await session.execute(stmt)
        return result.scalar_one()

    async def get_access_labels(self, session: AsyncSession) -> Sequence:
        """
        Retrieve the id and allowed_* lists of every document.

        Args:
            session: Async database session

        Returns:
            Sequence of rows (id, allowed_locations, allowed_positions, allowed_websites)
        """
        stmt = select(
            DocumentModel.id,
            DocumentModel.allowed_locations,
            DocumentModel.allowed_positions,
            DocumentModel.allowed_websites,
        )
        result = await session.execute(stmt)
        return result.all()


document_crud = DocumentCRUD()
