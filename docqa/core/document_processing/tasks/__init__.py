"""
Document processing tasks.

Exports: ChunkingTask, WordWindowTextSplitter, chunk_text, ParsingTask, EmbeddingTask
"""

from .chunking_task import ChunkingTask, WordWindowTextSplitter, chunk_text
from .embedding_task import EmbeddingTask
from .parsing_task import ParsingTask

__all__ = [
    "ChunkingTask",
    "WordWindowTextSplitter",
    "chunk_text",
    "EmbeddingTask",
    "ParsingTask",
]
