"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with document-specific query methods for status tracking and session filtering.

Dependencies: sqlalchemy, ragchat.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.models.document_model import DocumentModel, DocumentStatus

ERROR_MESSAGE_MAX_LENGTH = 500


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with session-scoped queries and the status
    transitions of the ingestion state machine.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_session_id(
        self,
        session: AsyncSession,
        session_id: UUID,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve all documents for a specific session, newest first.

        Args:
            session: Async database session
            session_id: Parent session UUID

        Returns:
            Sequence of DocumentModels ordered by created_at descending
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.session_id == session_id)
            .order_by(DocumentModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_in_session(
        self,
        session: AsyncSession,
        id: UUID,
        session_id: UUID,
    ) -> DocumentModel | None:
        """
        Retrieve a document only if it belongs to the given session.

        Args:
            session: Async database session
            id: Document UUID
            session_id: Expected parent session UUID

        Returns:
            DocumentModel if found in the session, None otherwise
        """
        stmt = select(DocumentModel).where(
            DocumentModel.id == id,
            DocumentModel.session_id == session_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_processing(
        self,
        session: AsyncSession,
        document: DocumentModel,
        storage_path: str | None = None,
    ) -> DocumentModel:
        """
        Move a document to PROCESSING and clear any previous error.

        Args:
            session: Async database session
            document: Loaded document
            storage_path: Stored file location, set on first upload

        Returns:
            Updated DocumentModel
        """
        fields: dict = {"indexing_status": DocumentStatus.PROCESSING, "error_message": None}
        if storage_path is not None:
            fields["storage_path"] = storage_path
        return await self.update(session, document, **fields)

    async def mark_ready(
        self,
        session: AsyncSession,
        document: DocumentModel,
    ) -> DocumentModel:
        """
        Mark document as successfully indexed.

        Args:
            session: Async database session
            document: Loaded document

        Returns:
            Updated DocumentModel
        """
        return await self.update(
            session,
            document,
            indexing_status=DocumentStatus.READY,
            error_message=None,
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        document: DocumentModel,
        error_message: str,
    ) -> DocumentModel:
        """
        Mark document as failed with error details.

        Args:
            session: Async database session
            document: Loaded document
            error_message: Human-readable error, truncated to 500 characters

        Returns:
            Updated DocumentModel
        """
        return await self.update(
            session,
            document,
            indexing_status=DocumentStatus.FAILED,
            error_message=error_message[:ERROR_MESSAGE_MAX_LENGTH],
        )


document_crud = DocumentCRUD()
