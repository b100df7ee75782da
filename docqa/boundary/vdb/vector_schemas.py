"""
Vector database schemas.

Pydantic models for nearest-neighbor results returned by the chunk vector
store.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

import uuid

from pydantic import BaseModel, Field


class VectorSearchResult(BaseModel):
    """Single result from a nearest-neighbor query."""

    chunk_id: uuid.UUID = Field(description="Chunk identifier")
    document_id: uuid.UUID = Field(description="Owning document identifier")
    chunk_index: int = Field(description="Position of the chunk within its document", ge=0)
    content: str = Field(description="Chunk text content")
    distance: float = Field(description="Cosine distance to the query (0.0-2.0)")
