"""
Exception hierarchy for the docqa application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocQAException(Exception):
    """Base exception for all docqa application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(DocQAException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class NotFoundError(DocQAException):
    """Raised when a referenced record does not exist."""

    pass


class DocumentNotFoundError(NotFoundError):
    """Raised when a document cannot be found."""

    def __init__(self, document_id: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize document not found error.

        Args:
            document_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = str(document_id)
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id}", details)


class ChunkNotFoundError(NotFoundError):
    """Raised when a chunk cannot be found."""

    def __init__(self, chunk_id: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize chunk not found error.

        Args:
            chunk_id: ID of the missing chunk
            details: Additional context
        """
        details = details or {}
        details["chunk_id"] = str(chunk_id)
        self.chunk_id = chunk_id
        super().__init__(f"Chunk not found: {chunk_id}", details)


class ProviderError(DocQAException):
    """Raised when an embedding or generation provider call fails or times out."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        retryable: bool = True,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Provider role that failed ("embedding", "generation")
            retryable: Whether repeating the call may succeed
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        self.provider = provider
        self.retryable = retryable
        super().__init__(message, details)


class ContractViolation(DocQAException):
    """Raised when a provider returns a vector of the wrong dimensionality."""

    def __init__(
        self,
        expected_dimension: int,
        actual_dimension: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize contract violation.

        Args:
            expected_dimension: Configured embedding dimension
            actual_dimension: Length of the vector actually returned
            details: Additional context
        """
        details = details or {}
        details["expected_dimension"] = expected_dimension
        details["actual_dimension"] = actual_dimension
        self.expected_dimension = expected_dimension
        self.actual_dimension = actual_dimension
        super().__init__(
            f"Embedding has {actual_dimension} dimensions, expected {expected_dimension}",
            details,
        )


class DocumentProcessingError(DocQAException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when text extraction fails for a supported file type."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            document_id: ID of the document
            file_type: Type of file that failed parsing
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_id, details)


class StorageError(DocumentProcessingError):
    """Raised when the blob store cannot write or read a document."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            path: Blob store path involved
            details: Additional context
        """
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, None, details)
