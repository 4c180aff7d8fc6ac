"""
Message domain models and schemas.

Dependencies: pydantic
System role: Message API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ragchat.models.common import PageResponse
from ragchat.models.context import MessageContext, parse_message_context


class CreateMessageRequest(BaseModel):
    """Request schema for posting a message to a session."""

    sender: str = Field(default="USER", description="Message author: USER or AI")
    content: str = Field(default="", description="Message text")
    metadata: dict[str, Any] | None = Field(
        default=None,
        description="Client metadata stored as the message context",
    )


class MessageResponse(BaseModel):
    """Response schema for a single message."""

    id: uuid.UUID
    session_id: uuid.UUID
    sender: str
    content: str
    context: MessageContext | None = None
    sequence: int
    created_at: datetime

    @classmethod
    def from_model(cls, message) -> "MessageResponse":
        """Build from a MessageModel row, parsing the stored context."""
        return cls(
            id=message.id,
            session_id=message.session_id,
            sender=message.sender.value,
            content=message.content,
            context=parse_message_context(message.context),
            sequence=message.sequence,
            created_at=message.created_at,
        )


MessagePage = PageResponse[MessageResponse]
