"""
Session service orchestrator.

Coordinates session lifecycle operations.

Dependencies: ragchat.boundary.db.CRUD, ragchat.boundary.storage
System role: Session use case orchestration
"""

import logging
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.document_crud import document_crud
from ragchat.boundary.db.CRUD.message_crud import message_crud
from ragchat.boundary.db.CRUD.session_crud import session_crud
from ragchat.boundary.db.models.session_model import SessionModel
from ragchat.boundary.storage.local_storage import LocalDocumentStorage
from ragchat.core.exceptions import SessionNotFoundError, ValidationError
from ragchat.models.session import SessionResponse

logger = logging.getLogger(__name__)

SESSION_NAME_MAX_LENGTH = 255


def _validate_name(session_name: str | None) -> str:
    if session_name is None or not session_name.strip():
        raise ValidationError("Session name is required", field="session_name")
    if len(session_name) > SESSION_NAME_MAX_LENGTH:
        raise ValidationError(
            "Session name must not exceed 255 characters",
            field="session_name",
        )
    return session_name


class SessionService:
    """Session service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        storage: LocalDocumentStorage | None = None,
    ) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
            storage: Document storage; when set, deleting a session removes its files
        """
        self.db = db
        self._storage = storage

    async def create_session(self, user_id: UUID, session_name: str | None) -> SessionResponse:
        """
        Create a session owned by user_id.

        Args:
            user_id: Owner UUID
            session_name: Display name (required, at most 255 characters)

        Returns:
            SessionResponse: Created session with zero messages

        Raises:
            ValidationError: If the name is blank or too long
        """
        name = _validate_name(session_name)
        session = await session_crud.create(
            self.db,
            user_id=user_id,
            session_name=name,
            is_favorite=False,
        )
        await self.db.commit()
        logger.info(f"{__name__}:create_session - Created session {session.id} for user {user_id}")
        return self._to_response(session, 0)

    async def list_sessions(self, user_id: UUID) -> list[SessionResponse]:
        """
        List the sessions of one owner, newest first.

        Args:
            user_id: Owner UUID

        Returns:
            list[SessionResponse]: Sessions with message counts
        """
        rows = await session_crud.get_by_user_id_with_counts(self.db, user_id)
        return [self._to_response(session, count) for session, count in rows]

    async def get_session(self, session_id: UUID, user_id: UUID | None = None) -> SessionResponse:
        """
        Get one session.

        Raises:
            SessionNotFoundError: If the session does not exist or is not owned by user_id
        """
        session = await self._load(session_id, user_id)
        return await self._with_count(session)

    async def rename_session(
        self,
        session_id: UUID,
        session_name: str | None,
        user_id: UUID | None = None,
    ) -> SessionResponse:
        """
        Rename a session.

        Raises:
            ValidationError: If the name is blank or too long
            SessionNotFoundError: If the session does not exist
        """
        name = _validate_name(session_name)
        session = await self._load(session_id, user_id)
        session = await session_crud.update(self.db, session, session_name=name)
        await self.db.commit()
        return await self._with_count(session)

    async def toggle_favorite(self, session_id: UUID, user_id: UUID | None = None) -> SessionResponse:
        """Flip the favorite flag of a session."""
        session = await self._load(session_id, user_id)
        session = await session_crud.update(self.db, session, is_favorite=not session.is_favorite)
        await self.db.commit()
        return await self._with_count(session)

    async def delete_session(self, session_id: UUID, user_id: UUID | None = None) -> None:
        """
        Delete a session with its messages and documents.

        Stored files are removed after the rows are gone. Vector entries of
        the session are left in the index.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        session = await self._load(session_id, user_id)
        documents = await document_crud.get_by_session_id(self.db, session_id)
        paths = [document.storage_path for document in documents]

        await session_crud.delete(self.db, session)
        await self.db.commit()
        logger.info(f"{__name__}:delete_session - Deleted session {session_id}")

        if self._storage is not None:
            for path in paths:
                await run_in_threadpool(self._storage.delete, path)

    async def _load(self, session_id: UUID, user_id: UUID | None) -> SessionModel:
        session = await session_crud.get_for_user(self.db, session_id, user_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        return session

    async def _with_count(self, session: SessionModel) -> SessionResponse:
        count = await message_crud.count_by_session(self.db, session.id)
        return self._to_response(session, count)

    @staticmethod
    def _to_response(session: SessionModel, message_count: int) -> SessionResponse:
        return SessionResponse(
            id=session.id,
            user_id=session.user_id,
            session_name=session.session_name,
            is_favorite=session.is_favorite,
            created_at=session.created_at,
            updated_at=session.updated_at,
            message_count=message_count,
        )
