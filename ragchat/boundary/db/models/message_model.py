"""
Chat message ORM model.

Messages are append-only: created once with a per-session sequence number
and never updated.

Dependencies: sqlalchemy, ragchat.boundary.db.base, ragchat.models.context
System role: Conversation turn persistence
"""

import enum
import uuid

from sqlalchemy import JSON, Enum, ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ragchat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin
from ragchat.models.context import (
    ClientMetadata,
    RetrievalContext,
    dump_message_context,
    parse_message_context,
)


class MessageSender(str, enum.Enum):
    """Author of a conversation turn."""

    USER = "USER"
    AI = "AI"


class MessageModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Chat message ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        session_id: Foreign key to SessionModel (cascade delete)
        sender: USER or AI
        content: Message text
        context: JSON context payload, see ragchat.models.context
        sequence: Position within the session, unique per session
        created_at: Creation timestamp (UTC)

    Constraints:
        (session_id, sequence): UNIQUE, rejects duplicate sequence numbers
    """

    __tablename__ = "chat_messages"
    __table_args__ = (
        UniqueConstraint("session_id", "sequence", name="uq_chat_messages_session_sequence"),
    )

    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    sender: Mapped[MessageSender] = mapped_column(
        Enum(MessageSender, native_enum=False),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(Text, nullable=False)

    context: Mapped[dict | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
    )

    sequence: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    session = relationship("SessionModel", back_populates="messages")

    @property
    def context_payload(self) -> RetrievalContext | ClientMetadata | None:
        """Typed view of the context column."""
        return parse_message_context(self.context)

    @staticmethod
    def serialize_context(
        payload: RetrievalContext | ClientMetadata | None,
    ) -> dict | None:
        """Column value for a context variant."""
        return dump_message_context(payload)
