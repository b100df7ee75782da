"""
Query API endpoint.

Routes: POST /query

Dependencies: docqa.application.services.query_service, docqa.models.query
System role: Grounded question answering HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from docqa.api.deps import get_query_service
from docqa.api.routers.router_utils import handle_rag_errors
from docqa.application.services.query_service import QueryService
from docqa.models.common import ErrorResponse
from docqa.models.query import QueryRequest, QueryResponse

logger = logging.getLogger(__name__)

NO_RELEVANT_CHUNKS = "No relevant chunks found."

router = APIRouter(
    prefix="/query",
    tags=["query"],
    responses={
        404: {"model": ErrorResponse, "description": NO_RELEVANT_CHUNKS},
        503: {"model": ErrorResponse, "description": "Embedding or generation provider failure"},
    },
)


@router.post("", response_model=QueryResponse)
@handle_rag_errors
async def query(
    request: QueryRequest,
    service: QueryService = Depends(get_query_service),
) -> QueryResponse:
    """
    Answer a question from the stored documents.

    Returns 404 when no chunk is close enough to the question; the answer
    model is not called in that case.
    """
    result = await service.answer(request.question, request.history, request.scope)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NO_RELEVANT_CHUNKS)
    return QueryResponse(answer=result.answer, contexts=result.contexts)
