"""Service orchestrators."""

from .document_service import DocumentService
from .message_service import MessageService
from .session_locks import SessionLockRegistry
from .session_service import SessionService

__all__ = [
    "DocumentService",
    "MessageService",
    "SessionLockRegistry",
    "SessionService",
]
