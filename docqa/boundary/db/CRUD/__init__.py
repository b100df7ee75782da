"""
CRUD operations package.

Exports:
  - BaseCRUD: Generic CRUD base class
  - DocumentCRUD / document_crud: Document operations
  - ChunkCRUD / chunk_crud: Chunk operations

Dependencies: sqlalchemy
System role: Database access layer
"""

from docqa.boundary.db.CRUD.base_crud import BaseCRUD
from docqa.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from docqa.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "ChunkCRUD",
    "chunk_crud",
]
