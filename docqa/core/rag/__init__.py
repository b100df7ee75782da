"""
RAG package.

Exports prompt assembly and query-path schemas.
"""

from docqa.core.rag.prompt_assembler import assemble
from docqa.core.rag.schemas import (
    AccessScope,
    ConversationMessage,
    QueryResult,
    RetrievalResult,
    RetrievedContext,
)

__all__ = [
    "assemble",
    "AccessScope",
    "ConversationMessage",
    "QueryResult",
    "RetrievalResult",
    "RetrievedContext",
]
