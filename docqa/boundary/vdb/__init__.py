"""
Vector store package.

Exports:
  - ChunkVectorStore: pgvector-backed chunk store with cosine nearest search
  - VectorSearchResult: Single nearest-neighbor hit

Dependencies: sqlalchemy, pgvector, numpy
System role: Vector storage and similarity search
"""

from docqa.boundary.vdb.chunk_vector_store import ChunkVectorStore
from docqa.boundary.vdb.vector_schemas import VectorSearchResult

__all__ = ["ChunkVectorStore", "VectorSearchResult"]
