"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - SessionModel, MessageModel, DocumentModel: Core domain entities
  - MessageSender, DocumentStatus: Enum types
  - session_crud, message_crud, document_crud: CRUD operation singletons

Dependencies: sqlalchemy, ragchat.configs
System role: Database adapter providing persistent storage for sessions,
messages and documents.
"""

from ragchat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from ragchat.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from ragchat.boundary.db.CRUD import (
    BaseCRUD,
    DocumentCRUD,
    MessageCRUD,
    SessionCRUD,
    document_crud,
    message_crud,
    session_crud,
)
from ragchat.boundary.db.models import (
    DocumentModel,
    DocumentStatus,
    MessageModel,
    MessageSender,
    SessionModel,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "SessionModel",
    "MessageModel",
    "MessageSender",
    "DocumentModel",
    "DocumentStatus",
    # CRUD classes
    "BaseCRUD",
    "SessionCRUD",
    "MessageCRUD",
    "DocumentCRUD",
    # CRUD singletons
    "session_crud",
    "message_crud",
    "document_crud",
]
