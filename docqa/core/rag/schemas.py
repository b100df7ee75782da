"""
RAG domain schemas.

Conversation history, asker access scope and retrieval results shared by the
retriever, the prompt assembler and the query service.

Dependencies: pydantic
System role: Typed contracts for the query path
"""

import uuid
from typing import Literal

from pydantic import BaseModel, Field


class ConversationMessage(BaseModel):
    """One prior turn of the conversation supplied with a query."""

    role: Literal["user", "assistant"] = Field(description="Speaker of the message")
    content: str = Field(description="Message text")


class AccessScope(BaseModel):
    """Labels describing the asker, matched against documents' allowed_* lists."""

    location: str | None = Field(default=None, description="Asker location label")
    position: str | None = Field(default=None, description="Asker position label")
    website: str | None = Field(default=None, description="Asker website label")

    def permits(
        self,
        allowed_locations: list[str] | None,
        allowed_positions: list[str] | None,
        allowed_websites: list[str] | None,
    ) -> bool:
        """
        Check whether a document with the given allowed lists is visible.

        A null or empty list leaves that dimension unrestricted. A restricted
        dimension requires the asker to carry a value contained in the list.
        """
        for allowed, value in (
            (allowed_locations, self.location),
            (allowed_positions, self.position),
            (allowed_websites, self.website),
        ):
            if allowed and value not in allowed:
                return False
        return True


class RetrievedContext(BaseModel):
    """A retrieved chunk numbered by rank (1-based)."""

    number: int = Field(ge=1, description="Rank, starting at 1")
    chunk_id: uuid.UUID
    document_id: uuid.UUID
    chunk_index: int
    content: str
    distance: float


class RetrievalResult(BaseModel):
    """Ranked contexts for a question; empty means no relevant content."""

    contexts: list[RetrievedContext] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.contexts


class QueryResult(BaseModel):
    """Grounded answer together with the contexts it was built from."""

    answer: str
    contexts: list[RetrievedContext]
