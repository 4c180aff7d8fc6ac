"""
Vector index schemas.

Pydantic models for the items written to and read from the vector index,
plus the narrow contract the RAG pipeline depends on.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

SOURCE_SESSION_DOCUMENTS = "session-documents"
SOURCE_CHAT_MESSAGE = "chat-message"


class ChunkMetadata(BaseModel):
    """
    Metadata attached to each indexed text.

    Document chunks carry document_id/filename/chunk_index; chat messages
    carry message_id/sender/sequence. IDs are stored as strings.
    """

    model_config = ConfigDict(extra="ignore")

    session_id: str = Field(description="Session ID for isolation")
    source: str = Field(description="Provenance tag: session-documents or chat-message")
    document_id: str | None = Field(default=None, description="Source document ID")
    filename: str | None = Field(default=None, description="Original filename of the source document")
    chunk_index: int | None = Field(default=None, description="Position of the chunk within its document")
    message_id: str | None = Field(default=None, description="Source chat message ID")
    sender: str | None = Field(default=None, description="Chat message sender")
    sequence: int | None = Field(default=None, description="Chat message sequence number")


class IndexItem(BaseModel):
    """Text plus metadata to add to the index."""

    text: str
    metadata: ChunkMetadata


class RetrievedChunk(BaseModel):
    """Single result from a similarity search."""

    text: str = Field(description="Indexed text")
    score: float | None = Field(default=None, description="Similarity score, higher is closer")
    metadata: ChunkMetadata


class VectorIndex(Protocol):
    """
    Contract for the vector index collaborator.

    Both calls block; async callers run them in a threadpool.
    Implementations must tolerate concurrent callers.
    """

    def search(
        self,
        query: str,
        top_k: int,
        session_id: str,
        source: str,
    ) -> list[RetrievedChunk]:
        """Return up to top_k chunks of one session and provenance, best first."""
        ...

    def add(self, items: list[IndexItem]) -> None:
        """Add items to the index."""
        ...
