"""
Session ORM model.

Represents one user conversation with its messages and uploaded documents.
Sessions isolate retrieval scope for RAG operations.

Dependencies: sqlalchemy, ragchat.boundary.db.base
System role: Session persistence for chat context management
"""

import uuid

from sqlalchemy import Boolean, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ragchat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class SessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Session ORM model for isolating chat and document scope.

    Documents are scoped to sessions so RAG retrieval only uses the
    session's own uploads. Cascade delete removes messages and document
    rows with the session; stored files and vector entries are not touched.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner UUID
        session_name: Display name (255 char limit)
        is_favorite: Favorite flag
        messages: MessageModel rows for this session (cascading delete)
        documents: DocumentModel rows for this session (cascading delete)
        created_at: Session creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "chat_sessions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,
    )

    session_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    is_favorite: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Relationships
    messages = relationship(
        "MessageModel",
        back_populates="session",
        cascade="all, delete-orphan",
    )
    documents = relationship(
        "DocumentModel",
        back_populates="session",
        cascade="all, delete-orphan",
    )
