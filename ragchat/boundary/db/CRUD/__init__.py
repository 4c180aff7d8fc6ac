"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from ragchat.boundary.db.CRUD import session_crud, message_crud, document_crud

    session = await session_crud.get_by_id(db, session_id)
"""

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from ragchat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from ragchat.boundary.db.CRUD.session_crud import SessionCRUD, session_crud

__all__ = [
    "BaseCRUD",
    "SessionCRUD",
    "session_crud",
    "MessageCRUD",
    "message_crud",
    "DocumentCRUD",
    "document_crud",
]
