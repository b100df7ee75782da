"""
Document API endpoints.

Routes: POST /documents, GET /documents, GET /documents/{id},
PUT /documents/{id}, DELETE /documents/{id}

Dependencies: docqa.application.services.document_service, docqa.models
System role: Document HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from docqa.api.deps import get_document_service
from docqa.api.routers.router_utils import handle_rag_errors
from docqa.application.services.document_service import DocumentService
from docqa.core.document_processing.models import IngestionResult
from docqa.models.common import ErrorResponse, PaginatedResponse
from docqa.models.document import (
    DocumentFields,
    DocumentResponse,
    DocumentUpdate,
    IngestionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/documents",
    tags=["documents"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid title, labels or file"},
        404: {"model": ErrorResponse, "description": "Document not found"},
        422: {"model": ErrorResponse, "description": "Document could not be parsed"},
        502: {"model": ErrorResponse, "description": "Blob store failure"},
    },
)


async def _read_upload(file: UploadFile | None) -> tuple[str | None, bytes | None]:
    if file is None:
        return None, None
    return file.filename, await file.read()


async def _ingestion_response(
    service: DocumentService,
    result: IngestionResult,
    title: str,
    enqueued_count: int,
) -> IngestionResponse:
    return IngestionResponse(
        document_id=result.document_id,
        title=title,
        file_path=result.file_path,
        chunk_count=result.chunk_count,
        enqueued_count=enqueued_count,
        ingestion_state=await service.ingestion_state(result.document_id),
    )


@router.post("", response_model=IngestionResponse, status_code=status.HTTP_201_CREATED)
@handle_rag_errors
async def create_document(
    title: str | None = Form(None),
    file: UploadFile | None = File(None),
    allowed_locations: str | None = Form(None),
    allowed_positions: str | None = Form(None),
    allowed_websites: str | None = Form(None),
    service: DocumentService = Depends(get_document_service),
) -> IngestionResponse:
    """
    Upload a document and ingest it.

    allowed_* fields are JSON arrays of strings; empty means unrestricted.
    Returns once chunks are stored; embeddings are computed asynchronously.
    """
    fields = DocumentFields.from_form(title, allowed_locations, allowed_positions, allowed_websites)
    filename, data = await _read_upload(file)

    logger.info(
        "Document upload request received",
        extra={"upload_filename": filename, "size_bytes": len(data) if data else 0},
    )
    result = await service.create_document(fields, filename, data)
    return await _ingestion_response(service, result, fields.title, result.chunk_count)


@router.get("", response_model=PaginatedResponse[DocumentResponse])
@handle_rag_errors
async def list_documents(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    search: str | None = Query(None, max_length=200, description="Title substring or exact document id"),
    service: DocumentService = Depends(get_document_service),
) -> PaginatedResponse[DocumentResponse]:
    """List documents newest first, optionally filtered by `search`."""
    documents, total = await service.list_documents(limit=limit, offset=offset, search=search)
    return PaginatedResponse[DocumentResponse](
        items=[DocumentResponse(**document) for document in documents],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{document_id}", response_model=DocumentResponse)
@handle_rag_errors
async def get_document(
    document_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Get a document with its chunk and embedding progress."""
    return DocumentResponse(**await service.get_document(document_id))


@router.put("/{document_id}", response_model=IngestionResponse)
@handle_rag_errors
async def update_document(
    document_id: UUID,
    title: str | None = Form(None),
    file: UploadFile | None = File(None),
    allowed_locations: str | None = Form(None),
    allowed_positions: str | None = Form(None),
    allowed_websites: str | None = Form(None),
    service: DocumentService = Depends(get_document_service),
) -> IngestionResponse:
    """
    Update metadata and optionally replace the file.

    Omitted fields are left unchanged. A new file regenerates every chunk.
    """
    update = DocumentUpdate.from_form(title, allowed_locations, allowed_positions, allowed_websites)
    filename, data = await _read_upload(file)

    result = await service.update_document(document_id, update, filename, data)
    document = await service.get_document(document_id)
    return await _ingestion_response(
        service,
        result,
        document["title"],
        result.chunk_count if file is not None else 0,
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_rag_errors
async def delete_document(
    document_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """Delete a document and all of its chunks."""
    await service.delete_document(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
