"""
Database models package.

Exports:
  - DocumentModel: Uploaded document with access-scope labels
  - ChunkModel: Document chunk with optional embedding vector

Dependencies: sqlalchemy, pgvector, docqa.boundary.db.base
System role: Database model definitions for domain entities
"""

from docqa.boundary.db.models.document_model import DocumentModel
from docqa.boundary.db.models.chunk_model import ChunkModel, EMBEDDING_DIMENSION

__all__ = [
    "DocumentModel",
    "ChunkModel",
    "EMBEDDING_DIMENSION",
]
