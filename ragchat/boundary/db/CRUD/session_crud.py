"""
Session CRUD operations.

Provides Create, Read, Update, Delete operations for SessionModel
with owner-scoped lookups.

Dependencies: sqlalchemy, ragchat.boundary.db.models
System role: Session persistence operations
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.models.message_model import MessageModel
from ragchat.boundary.db.models.session_model import SessionModel


class SessionCRUD(BaseCRUD[SessionModel]):
    """CRUD operations for SessionModel."""

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def get_for_user(
        self,
        session: AsyncSession,
        id: UUID,
        user_id: UUID | None,
    ) -> SessionModel | None:
        """
        Retrieve a session, scoped to its owner when user_id is given.

        Args:
            session: Async database session
            id: Session UUID
            user_id: Owner UUID, or None to skip the ownership check

        Returns:
            SessionModel if found (and owned), None otherwise
        """
        stmt = select(SessionModel).where(SessionModel.id == id)
        if user_id is not None:
            stmt = stmt.where(SessionModel.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id_with_counts(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> list[tuple[SessionModel, int]]:
        """
        Retrieve all sessions of one owner with their message counts.

        Args:
            session: Async database session
            user_id: Owner UUID

        Returns:
            List of (SessionModel, message_count) ordered by created_at descending
        """
        message_count = func.count(MessageModel.id)
        stmt = (
            select(SessionModel, message_count)
            .outerjoin(MessageModel, MessageModel.session_id == SessionModel.id)
            .where(SessionModel.user_id == user_id)
            .group_by(SessionModel.id)
            .order_by(SessionModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]


session_crud = SessionCRUD()
