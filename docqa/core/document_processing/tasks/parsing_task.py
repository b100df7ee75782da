"""
Document parsing task using LangChain document loaders.

Reads a stored document from the blob store and converts it to plain text.
PDF goes through PyPDFLoader, DOCX through Docx2txtLoader and TXT is decoded
as UTF-8. Other extensions are not supported and yield None.

Dependencies: langchain_community.document_loaders, pypdf, docx2txt
System role: Text extraction stage of document ingestion pipeline
"""

import logging
import os
import tempfile
from pathlib import PurePosixPath

from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader

from docqa.core.exceptions import ParsingError
from docqa.core.providers import BlobStore

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({"pdf", "docx", "txt"})


def file_extension(path: str) -> str:
    """Lowercase extension without the dot ("" when absent)."""
    return PurePosixPath(path).suffix.lower().lstrip(".")


class ParsingTask:
    """Extract text from documents held in the blob store."""

    def __init__(self, blob_store: BlobStore) -> None:
        """
        Initialize parsing task.

        Args:
            blob_store: Source of raw document bytes
        """
        self._blob_store = blob_store

    def extract(self, path: str) -> str | None:
        """
        Extract plain text from a stored document.

        Args:
            path: Blob store path

        Returns:
            str | None: Extracted text, None for unsupported extensions

        Raises:
            ParsingError: When a supported file cannot be parsed
            StorageError: When the blob store read fails
        """
        extension = file_extension(path)
        if extension not in SUPPORTED_EXTENSIONS:
            logger.info(
                f"{__name__}:extract - Unsupported extension, skipping extraction",
                extra={"path": path, "extension": extension},
            )
            return None

        data = self._blob_store.get(path)

        if extension == "txt":
            return data.decode("utf-8", errors="replace")

        return self._extract_with_loader(data, extension, path)

    def _extract_with_loader(self, data: bytes, extension: str, path: str) -> str:
        """Write bytes to a temp file and run the matching LangChain loader."""
        fd, temp_path = tempfile.mkstemp(suffix=f".{extension}")
        try:
            with os.fdopen(fd, "wb") as temp_file:
                temp_file.write(data)

            loader = PyPDFLoader(temp_path) if extension == "pdf" else Docx2txtLoader(temp_path)
            documents = loader.load()
        except Exception as e:
            logger.error(
                f"{__name__}:extract - Failed to parse document",
                extra={"path": path, "extension": extension, "error": str(e)},
            )
            raise ParsingError(
                f"Failed to parse {extension.upper()}: {e}",
                file_type=extension,
                details={"path": path},
            ) from e
        finally:
            os.unlink(temp_path)

        return "\n".join(doc.page_content for doc in documents)
