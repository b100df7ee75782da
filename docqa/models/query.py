"""
Query schemas.

Request/response schemas for grounded question answering.

Dependencies: pydantic, docqa.core.rag.schemas
System role: Query API contracts
"""

from pydantic import BaseModel, Field

from docqa.core.rag.schemas import AccessScope, ConversationMessage, RetrievedContext


class QueryRequest(BaseModel):
    """Question with prior conversation and optional asker scope."""

    question: str = Field(description="User question; blank questions are rejected by the service")
    history: list[ConversationMessage] = Field(
        default_factory=list,
        description="Previous conversation in original order",
    )
    scope: AccessScope | None = Field(
        default=None,
        description="Asker labels used to filter documents by allowed_* lists",
    )


class QueryResponse(BaseModel):
    """Grounded answer and the contexts it was built from."""

    answer: str
    contexts: list[RetrievedContext]
