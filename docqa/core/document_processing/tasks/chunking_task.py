"""
Text chunking task using a word-window TextSplitter.

Splits extracted text into consecutive, non-overlapping windows of at most
max_words whitespace-delimited words, rejoined with single spaces.

Dependencies: langchain_text_splitters
System role: Chunking stage of document ingestion pipeline
"""

from typing import Any

from langchain_text_splitters import TextSplitter


class WordWindowTextSplitter(TextSplitter):
    """Split text into fixed-size word windows with no overlap."""

    def __init__(self, max_words: int = 500, **kwargs: Any) -> None:
        """
        Initialize splitter.

        Args:
            max_words: Maximum words per chunk

        Raises:
            ValueError: When max_words < 1
        """
        if max_words < 1:
            raise ValueError(f"max_words must be at least 1, got {max_words}")
        kwargs.setdefault("chunk_overlap", 0)
        super().__init__(chunk_size=max_words, **kwargs)
        self._max_words = max_words

    @property
    def max_words(self) -> int:
        return self._max_words

    def split_text(self, text: str) -> list[str]:
        words = text.split()
        return [
            " ".join(words[start:start + self._max_words])
            for start in range(0, len(words), self._max_words)
        ]


class ChunkingTask:
    """Split extracted document text into word-window chunks."""

    def __init__(self, max_words: int = 500) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            max_words: Maximum chunk size in words

        Raises:
            ValueError: When max_words < 1
        """
        self._splitter = WordWindowTextSplitter(max_words=max_words)

    def chunk(self, text: str | None) -> list[str]:
        """
        Split text into chunks.

        Args:
            text: Extracted document text

        Returns:
            list[str]: Chunks in document order; empty for empty or
            whitespace-only text
        """
        if not text:
            return []
        return self._splitter.split_text(text)


def chunk_text(text: str, max_words: int = 500) -> list[str]:
    """Split text into windows of at most max_words words."""
    return WordWindowTextSplitter(max_words=max_words).split_text(text)
