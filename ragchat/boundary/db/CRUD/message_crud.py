"""
Chat message CRUD operations.

Provides ordered reads by sequence, last-sequence lookup and pagination
for MessageModel. Messages are never updated.

Dependencies: sqlalchemy, ragchat.boundary.db.models
System role: Conversation turn persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.base_crud import BaseCRUD
from ragchat.boundary.db.models.message_model import MessageModel


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def get_by_session_ordered(
        self,
        session: AsyncSession,
        session_id: UUID,
    ) -> Sequence[MessageModel]:
        """
        Retrieve all messages of a session in ascending sequence order.

        Args:
            session: Async database session
            session_id: Parent session UUID

        Returns:
            Sequence of MessageModels, oldest first
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.sequence.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_last_sequence(
        self,
        session: AsyncSession,
        session_id: UUID,
    ) -> int | None:
        """
        Highest sequence number used in a session.

        Args:
            session: Async database session
            session_id: Parent session UUID

        Returns:
            The maximum sequence, or None when the session has no messages
        """
        stmt = select(func.max(MessageModel.sequence)).where(
            MessageModel.session_id == session_id
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_page(
        self,
        session: AsyncSession,
        session_id: UUID,
        limit: int,
        offset: int = 0,
    ) -> Sequence[MessageModel]:
        """
        Retrieve one page of a session's messages, newest first.

        Args:
            session: Async database session
            session_id: Parent session UUID
            limit: Page size
            offset: Number of messages to skip

        Returns:
            Sequence of MessageModels ordered by sequence descending
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.sequence.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_session(self, session: AsyncSession, session_id: UUID) -> int:
        """Number of messages in a session."""
        stmt = (
            select(func.count())
            .select_from(MessageModel)
            .where(MessageModel.session_id == session_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one()


message_crud = MessageCRUD()
