"""
Document service orchestrator.

Coordinates document upload, text extraction, chunking, chunk persistence and
embedding dispatch, plus metadata updates, file replacement and deletion.

The document row and its full chunk set are written in one transaction;
embedding tasks are enqueued only after that transaction commits.

Dependencies: sqlalchemy, fastapi.concurrency, docqa.boundary, docqa.core
System role: Ingestion orchestration
"""

import logging
from typing import Any
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.aws.s3_client import build_document_path
from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.db.models.document_model import DocumentModel
from docqa.boundary.vdb.chunk_vector_store import ChunkVectorStore
from docqa.core.document_processing.models import (
    EmbedChunkTask,
    IngestionResult,
    IngestionState,
)
from docqa.core.document_processing.tasks.chunking_task import ChunkingTask
from docqa.core.exceptions import DocumentNotFoundError, ValidationError
from docqa.core.providers import BlobStore, DocumentConverter, TaskQueue
from docqa.models.document import DocumentFields, DocumentUpdate

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Lifecycle per document: UploadAccepted -> TextExtracted -> Chunked ->
    PartiallyEmbedded | FullyEmbedded. Only the last three are observable
    after a request returns; see IngestionState.
    """

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        converter: DocumentConverter,
        chunker: ChunkingTask,
        vector_store: ChunkVectorStore,
        task_queue: TaskQueue,
        key_prefix: str = "rag_files",
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession owning the ingestion transaction
            blob_store: Raw file storage
            converter: Text extraction for stored files
            chunker: Word-window chunker
            vector_store: Chunk persistence
            task_queue: Embedding task dispatch
            key_prefix: Blob store folder for uploads
        """
        self.db = db
        self._blob_store = blob_store
        self._converter = converter
        self._chunker = chunker
        self._vector_store = vector_store
        self._task_queue = task_queue
        self._key_prefix = key_prefix

    async def create_document(
        self,
        fields: DocumentFields,
        filename: str,
        data: bytes,
    ) -> IngestionResult:
        """
        Store, extract, chunk and persist a new document.

        Steps:
        1. Upload bytes to the blob store
        2. Create the document row with file_path set
        3. Extract text and chunk it
        4. Persist chunks, commit
        5. Enqueue one embedding task per chunk

        Args:
            fields: Validated title and access labels
            filename: Original upload filename (extension selects the extractor)
            data: Raw file bytes

        Returns:
            IngestionResult: Document id, stored path and created chunk ids

        Raises:
            ValidationError: Missing file
            StorageError: Blob store write/read failed
            ParsingError: Supported file could not be parsed
        """
        _validate_upload(filename, data)
        path = build_document_path(self._key_prefix, filename)
        await run_in_threadpool(self._blob_store.put, data, path)

        try:
            document = await document_crud.create(
                self.db,
                title=fields.title,
                file_path=path,
                allowed_locations=fields.allowed_locations,
                allowed_positions=fields.allowed_positions,
                allowed_websites=fields.allowed_websites,
            )
            chunk_ids = await self._ingest(document.id, path)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                f"{__name__}:create_document - Ingestion failed, transaction rolled back",
                extra={"file_path": path, "error": str(e), "error_type": type(e).__name__},
            )
            raise

        logger.info(
            f"{__name__}:create_document - Document ingested",
            extra={"document_id": str(document.id), "file_path": path, "chunk_count": len(chunk_ids)},
        )
        self._enqueue(chunk_ids)
        return IngestionResult(document_id=document.id, file_path=path, chunk_ids=chunk_ids)

    async def update_document(
        self,
        document_id: UUID,
        update: DocumentUpdate,
        filename: str | None = None,
        data: bytes | None = None,
    ) -> IngestionResult:
        """
        Update metadata and optionally replace the file.

        A replacement file deletes every existing chunk and regenerates the
        chunk set in the same transaction. Metadata-only updates leave chunks
        untouched. The previous blob is not deleted.

        Raises:
            DocumentNotFoundError: Unknown document
            ValidationError: Invalid title or empty replacement file
            StorageError, ParsingError: Replacement ingestion failed
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        values: dict[str, Any] = update.model_dump(include=update.model_fields_set)
        if "title" in values and not values["title"]:
            raise ValidationError("title must not be empty", field="title")

        replacing = filename is not None or data is not None
        if replacing:
            _validate_upload(filename, data)
            path = build_document_path(self._key_prefix, filename)
            await run_in_threadpool(self._blob_store.put, data, path)
            values["file_path"] = path

        try:
            if replacing:
                await self._vector_store.delete_chunks_of(self.db, document_id)
            if values:
                document = await document_crud.update_by_id(self.db, document_id, **values)
            if replacing:
                chunk_ids = await self._ingest(document_id, document.file_path)
            else:
                chunk_ids = [chunk.id for chunk in await chunk_crud.get_by_document_id(self.db, document_id)]
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                f"{__name__}:update_document - Update failed, transaction rolled back",
                extra={"document_id": str(document_id), "error": str(e), "error_type": type(e).__name__},
            )
            raise

        logger.info(
            f"{__name__}:update_document - Document updated",
            extra={
                "document_id": str(document_id),
                "fields": sorted(values),
                "file_replaced": replacing,
            },
        )
        if replacing:
            self._enqueue(chunk_ids)
        return IngestionResult(document_id=document_id, file_path=document.file_path, chunk_ids=chunk_ids)

    async def delete_document(self, document_id: UUID) -> None:
        """
        Delete a document and all of its chunks.

        Raises:
            DocumentNotFoundError: Unknown document
        """
        if not await document_crud.exists(self.db, document_id):
            raise DocumentNotFoundError(document_id)

        try:
            await self._vector_store.delete_chunks_of(self.db, document_id)
            await document_crud.delete_by_id(self.db, document_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"document_id": str(document_id)},
        )

    async def get_document(self, document_id: UUID) -> dict:
        """
        Get a document with chunk and embedding progress.

        Returns:
            dict: Document fields plus chunk_count, embedded_count, ingestion_state

        Raises:
            DocumentNotFoundError: Unknown document
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return await self._describe(document)

    async def list_documents(
        self,
        limit: int = 20,
        offset: int = 0,
        search: str | None = None,
    ) -> tuple[list[dict], int]:
        """
        List documents newest first, optionally filtered by title or id.

        Returns:
            tuple[list[dict], int]: Page of documents and total count
        """
        search = search.strip() if search else None
        documents = await document_crud.get_page(self.db, limit=limit, offset=offset, search=search)
        total = await document_crud.count_matching(self.db, search=search)
        return [await self._describe(document) for document in documents], total

    async def ingestion_state(self, document_id: UUID) -> IngestionState:
        """Derive the ingestion state of a document from its chunks."""
        chunk_count = await chunk_crud.count_by_document_id(self.db, document_id)
        embedded_count = await chunk_crud.count_embedded_by_document_id(self.db, document_id)
        return IngestionState.from_counts(chunk_count, embedded_count)

    async def _describe(self, document: DocumentModel) -> dict:
        chunk_count = await chunk_crud.count_by_document_id(self.db, document.id)
        embedded_count = await chunk_crud.count_embedded_by_document_id(self.db, document.id)
        return {
            "id": document.id,
            "title": document.title,
            "file_path": document.file_path,
            "allowed_locations": document.allowed_locations,
            "allowed_positions": document.allowed_positions,
            "allowed_websites": document.allowed_websites,
            "chunk_count": chunk_count,
            "embedded_count": embedded_count,
            "ingestion_state": IngestionState.from_counts(chunk_count, embedded_count),
            "created_at": document.created_at,
            "updated_at": document.updated_at,
        }

    async def _ingest(self, document_id: UUID, path: str) -> list[UUID]:
        """Extract, chunk and persist; returns chunk ids in index order."""
        text = await run_in_threadpool(self._converter.extract, path)
        if text is None:
            logger.info(
                f"{__name__}:_ingest - No extractor for file type, storing zero chunks",
                extra={"document_id": str(document_id), "file_path": path},
            )
            return []

        pieces = self._chunker.chunk(text)
        chunk_ids = []
        for index, content in enumerate(pieces):
            chunk_ids.append(await self._vector_store.put_chunk(self.db, document_id, index, content))
        return chunk_ids

    def _enqueue(self, chunk_ids: list[UUID]) -> None:
        for chunk_id in chunk_ids:
            self._task_queue.enqueue(EmbedChunkTask(chunk_id=chunk_id))
        if chunk_ids:
            logger.info(
                f"{__name__}:_enqueue - Dispatched embedding tasks",
                extra={"count": len(chunk_ids)},
            )


def _validate_upload(filename: str | None, data: bytes | None) -> None:
    if not filename:
        raise ValidationError("file is required", field="file")
    if not data:
        raise ValidationError("file must not be empty", field="file")
