"""
Document ORM model.

Represents uploaded documents with indexing status and file metadata.
Tracks the ingestion lifecycle from upload to vector indexing.

Dependencies: sqlalchemy, ragchat.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum
import uuid

from sqlalchemy import BigInteger, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ragchat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentStatus(str, enum.Enum):
    """
    Document indexing lifecycle states.

    PENDING: Row created, file not yet stored
    PROCESSING: File stored, indexing job queued or running
    READY: Chunks added to the vector index (possibly zero chunks)
    FAILED: Storage or indexing error; error_message holds details
    """

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    READY = "READY"
    FAILED = "FAILED"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion pipeline state.

    Lifecycle: upload (PENDING) → stored and queued (PROCESSING) →
    indexed (READY) or failure (FAILED). PROCESSING may be re-entered by
    an explicit reindex.

    Attributes:
        id: UUID primary key (auto-generated)
        session_id: Foreign key to SessionModel (cascade delete)
        original_filename: Filename as uploaded (255 char limit)
        content_type: MIME type reported by the client
        size_bytes: Uploaded size
        storage_path: Local path of the stored file, empty until stored
        indexing_status: Current state (PENDING/PROCESSING/READY/FAILED)
        error_message: Null unless FAILED (500 char limit)
        created_at: Upload timestamp (UTC)
        updated_at: Last status change timestamp (UTC)
    """

    __tablename__ = "session_documents"

    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    original_filename: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Original filename",
    )

    content_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="application/octet-stream",
    )

    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)

    storage_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        default="",
        doc="Path of the stored file",
    )

    indexing_status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.PENDING,
    )

    error_message: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        doc="Error details if indexing failed",
    )

    # Relationships
    session = relationship("SessionModel", back_populates="documents")
