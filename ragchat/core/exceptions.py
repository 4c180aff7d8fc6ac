"""
Exception hierarchy for the RAG chat service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Client errors (NotFoundError, ValidationError) reach the caller.
GenerationError, RetrievalError, IndexingError and ExtractionError are
recovered inside the pipelines. StorageError is fatal to an upload.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagChatException(Exception):
    """Base exception for all application errors."""

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


class ValidationError(RagChatException):
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
        super().__init__(message, details)


class NotFoundError(RagChatException):
    """Raised when a requested resource does not exist."""


class SessionNotFoundError(NotFoundError):
    """Raised when a session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__("Session not found", details)


class DocumentNotFoundError(NotFoundError):
    """Raised when a document cannot be found within a session."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__("Document not found", details)


class GenerationError(RagChatException):
    """Raised when the text generation model fails or returns nothing usable."""


class RetrievalError(RagChatException):
    """Raised when retrieval operations fail."""

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval error.

        Args:
            message: Error message
            session_id: Session ID for the failed retrieval
            details: Additional context
        """
        details = details or {}
        if session_id:
            details["session_id"] = session_id
        super().__init__(message, details)


class IndexingError(RagChatException):
    """Raised when adding items to the vector index fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize indexing error.

        Args:
            message: Error message
            operation: Operation that failed (add, search, persist)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class ExtractionError(RagChatException):
    """Raised when text extraction from an uploaded file fails."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, details)


class StorageError(RagChatException):
    """Raised when an uploaded file cannot be written to storage."""
