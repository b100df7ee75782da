"""
Models for document processing pipeline.

Exports: EmbedChunkTask, IngestionResult, IngestionState
"""

from .ingestion import EmbedChunkTask, IngestionResult, IngestionState

__all__ = [
    "EmbedChunkTask",
    "IngestionResult",
    "IngestionState",
]
