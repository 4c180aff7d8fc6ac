"""
Database models package.

Exports:
  - SessionModel: Chat session ORM model
  - MessageModel, MessageSender: Chat message ORM model and sender enum
  - DocumentModel, DocumentStatus: Session document ORM model and status enum

Dependencies: sqlalchemy, ragchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from ragchat.boundary.db.models.document_model import DocumentModel, DocumentStatus
from ragchat.boundary.db.models.message_model import MessageModel, MessageSender
from ragchat.boundary.db.models.session_model import SessionModel

__all__ = [
    "SessionModel",
    "MessageModel",
    "MessageSender",
    "DocumentModel",
    "DocumentStatus",
]
