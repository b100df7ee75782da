"""
Query service orchestrator.

Answers a question from stored documents: embed the question, retrieve the
nearest chunks within the distance threshold, assemble the grounded prompt
and generate. Generation is skipped entirely when nothing relevant is found.

Dependencies: sqlalchemy, fastapi.concurrency, docqa.core
System role: Query use case orchestration
"""

import logging
from typing import Sequence
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.core.exceptions import ValidationError
from docqa.core.providers import Embedder, Generator
from docqa.core.rag.prompt_assembler import assemble
from docqa.core.rag.schemas import AccessScope, ConversationMessage, QueryResult
from docqa.core.retriever import Retriever

logger = logging.getLogger(__name__)


class QueryService:
    """Query service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        embedder: Embedder,
        retriever: Retriever,
        generator: Generator,
        enforce_access_scope: bool = True,
    ) -> None:
        """
        Initialize query service.

        Args:
            db: Async SQLAlchemy session
            embedder: Question embedder
            retriever: Nearest-chunk retriever
            generator: Answer generator
            enforce_access_scope: Filter documents by the asker's scope when given
        """
        self.db = db
        self._embedder = embedder
        self._retriever = retriever
        self._generator = generator
        self._enforce_access_scope = enforce_access_scope

    async def answer(
        self,
        question: str,
        history: Sequence[ConversationMessage] = (),
        scope: AccessScope | None = None,
    ) -> QueryResult | None:
        """
        Answer a question from retrieved context.

        Args:
            question: User question
            history: Prior conversation in original order
            scope: Asker labels for access filtering

        Returns:
            QueryResult | None: Answer with contexts, None when no chunk is
            within the distance threshold

        Raises:
            ValidationError: Blank question
            ProviderError: Embedding or generation failed
            ContractViolation: Question embedding had the wrong dimension
        """
        if not question or not question.strip():
            raise ValidationError("question must not be empty", field="question")

        document_ids = await self._eligible_documents(scope)
        if document_ids is not None and not document_ids:
            logger.info(f"{__name__}:answer - Scope excludes every document")
            return None

        question_embedding = await run_in_threadpool(self._embedder.embed, question)
        retrieval = await self._retriever.retrieve(
            self.db,
            question_embedding,
            document_ids=document_ids,
        )
        if retrieval.is_empty:
            return None

        prompt = assemble(question, retrieval.contexts, history)
        answer = await run_in_threadpool(self._generator.generate, prompt)

        logger.info(
            f"{__name__}:answer - Answer generated",
            extra={
                "context_count": len(retrieval.contexts),
                "history_length": len(history),
                "answer_length": len(answer),
            },
        )
        return QueryResult(answer=answer, contexts=retrieval.contexts)

    async def _eligible_documents(self, scope: AccessScope | None) -> set[UUID] | None:
        """Documents visible to the asker; None means no filtering."""
        if scope is None or not self._enforce_access_scope:
            return None

        rows = await document_crud.get_access_labels(self.db)
        return {
            row.id
            for row in rows
            if scope.permits(row.allowed_locations, row.allowed_positions, row.allowed_websites)
        }
