"""
Pydantic schemas for API contracts and the message context payload.
"""

from ragchat.models.common import ErrorResponse, PageResponse
from ragchat.models.context import (
    ClientMetadata,
    ContextDocument,
    MessageContext,
    RetrievalContext,
    dump_message_context,
    parse_message_context,
)
from ragchat.models.document import DocumentResponse
from ragchat.models.message import CreateMessageRequest, MessagePage, MessageResponse
from ragchat.models.session import (
    CreateSessionRequest,
    RenameSessionRequest,
    SessionResponse,
)

__all__ = [
    "ErrorResponse",
    "PageResponse",
    "ClientMetadata",
    "ContextDocument",
    "MessageContext",
    "RetrievalContext",
    "dump_message_context",
    "parse_message_context",
    "DocumentResponse",
    "CreateMessageRequest",
    "MessagePage",
    "MessageResponse",
    "CreateSessionRequest",
    "RenameSessionRequest",
    "SessionResponse",
]
