"""
Message service orchestrator.

Persists user turns with the next sequence number, queues them for
indexing and runs response generation. Message creation is serialized
per session so sequence numbers stay unique and gap-free.

Dependencies: ragchat.boundary.db.CRUD, ragchat.core.rag
System role: Message use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.application.services.session_locks import SessionLockRegistry
from ragchat.boundary.db.CRUD.message_crud import message_crud
from ragchat.boundary.db.CRUD.session_crud import session_crud
from ragchat.boundary.db.models.message_model import MessageModel, MessageSender
from ragchat.core.exceptions import SessionNotFoundError, ValidationError
from ragchat.core.rag.message_indexer import MessageIndexer
from ragchat.core.rag.response_generator import ResponseGenerator
from ragchat.models.context import ClientMetadata
from ragchat.models.message import MessagePage, MessageResponse

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class MessageService:
    """Message service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        response_generator: ResponseGenerator,
        indexer: MessageIndexer,
        locks: SessionLockRegistry,
    ) -> None:
        """
        Initialize message service.

        Args:
            db: Async SQLAlchemy session
            response_generator: Produces the AI reply for each new message
            indexer: Queues chat messages for vector indexing
            locks: Per-session lock registry shared across requests
        """
        self.db = db
        self._response_generator = response_generator
        self._indexer = indexer
        self._locks = locks

    async def create_message(
        self,
        session_id: UUID,
        sender: str | MessageSender,
        content: str,
        *,
        user_id: UUID | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> MessageModel:
        """
        Store a message and generate the AI reply to it.

        The reply is persisted with the following sequence number before
        this returns; retrieval and model failures produce the fallback
        reply instead of an error.

        Args:
            session_id: Target session
            sender: USER or AI
            content: Message text (must not be blank)
            user_id: Owner scope for the session lookup
            metadata: Client metadata stored as the message context

        Returns:
            MessageModel: The stored message (not the reply)

        Raises:
            ValidationError: Blank content or unknown sender
            SessionNotFoundError: Session missing or not owned by user_id
        """
        if content is None or not content.strip():
            raise ValidationError("Content is required", field="content")
        try:
            sender = MessageSender(sender)
        except ValueError as e:
            raise ValidationError(f"Unknown sender: {sender}", field="sender") from e

        session = await session_crud.get_for_user(self.db, session_id, user_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))

        context = ClientMetadata(extra=metadata) if metadata else None

        async with self._locks.lock_for(session_id):
            last_sequence = await message_crud.get_last_sequence(self.db, session_id)
            message = await message_crud.create(
                self.db,
                session_id=session_id,
                sender=sender,
                content=content,
                context=MessageModel.serialize_context(context),
                sequence=(last_sequence or 0) + 1,
            )
            await self.db.commit()
            logger.debug(
                f"{__name__}:create_message - Created message {message.id} seq={message.sequence}"
            )

            await self._indexer.submit(message)
            await self._response_generator.generate_response(self.db, message)

        return message

    async def list_messages_page(
        self,
        session_id: UUID,
        page: int = 0,
        size: int = 20,
        *,
        user_id: UUID | None = None,
    ) -> MessagePage:
        """
        One page of a session's messages, newest first.

        Args:
            session_id: Target session
            page: Zero-based page number
            size: Page size (1-100)
            user_id: Owner scope for the session lookup

        Returns:
            MessagePage: Messages ordered by sequence descending

        Raises:
            ValidationError: Negative page or out-of-range size
            SessionNotFoundError: Session missing or not owned by user_id
        """
        if page < 0:
            raise ValidationError("Page must not be negative", field="page")
        if size < 1 or size > MAX_PAGE_SIZE:
            raise ValidationError(f"Size must be between 1 and {MAX_PAGE_SIZE}", field="size")

        session = await session_crud.get_for_user(self.db, session_id, user_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))

        total = await message_crud.count_by_session(self.db, session_id)
        rows = await message_crud.get_page(self.db, session_id, limit=size, offset=page * size)
        return MessagePage.build(
            content=[MessageResponse.from_model(row) for row in rows],
            page=page,
            size=size,
            total_elements=total,
        )
