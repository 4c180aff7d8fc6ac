"""
Integration tests for MessageCRUD against in-memory SQLite.

System role: Verification of message ordering and sequence constraints
"""

import pytest
from sqlalchemy.exc import IntegrityError

from ragchat.boundary.db.CRUD.message_crud import message_crud
from ragchat.boundary.db.models.message_model import MessageModel, MessageSender
from ragchat.models.context import ClientMetadata


async def _add(db, session_id, sequence, sender=MessageSender.USER, content=None, context=None):
    return await message_crud.create(
        db,
        session_id=session_id,
        sender=sender,
        content=content or f"message {sequence}",
        sequence=sequence,
        context=context,
    )


class TestMessageCRUD:
    """Test suite for MessageCRUD."""

    @pytest.mark.asyncio
    async def test_last_sequence_is_none_for_empty_session(self, test_async_db, chat_session) -> None:
        """Test an empty session has no last sequence."""
        assert await message_crud.get_last_sequence(test_async_db, chat_session.id) is None

    @pytest.mark.asyncio
    async def test_last_sequence_is_maximum(self, test_async_db, chat_session) -> None:
        """Test the highest sequence is returned regardless of insert order."""
        # Arrange
        await _add(test_async_db, chat_session.id, 2)
        await _add(test_async_db, chat_session.id, 1)
        await test_async_db.commit()

        # Act & Assert
        assert await message_crud.get_last_sequence(test_async_db, chat_session.id) == 2

    @pytest.mark.asyncio
    async def test_ordered_listing_is_ascending(self, test_async_db, chat_session) -> None:
        """Test messages are listed by ascending sequence."""
        # Arrange
        for seq in (3, 1, 2):
            await _add(test_async_db, chat_session.id, seq)
        await test_async_db.commit()

        # Act
        messages = await message_crud.get_by_session_ordered(test_async_db, chat_session.id)

        # Assert
        assert [m.sequence for m in messages] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_page_is_descending_with_offset(self, test_async_db, chat_session) -> None:
        """Test paging returns newest first."""
        # Arrange
        for seq in range(1, 6):
            await _add(test_async_db, chat_session.id, seq)
        await test_async_db.commit()

        # Act
        first = await message_crud.get_page(test_async_db, chat_session.id, limit=2, offset=0)
        second = await message_crud.get_page(test_async_db, chat_session.id, limit=2, offset=2)

        # Assert
        assert [m.sequence for m in first] == [5, 4]
        assert [m.sequence for m in second] == [3, 2]

    @pytest.mark.asyncio
    async def test_duplicate_sequence_is_rejected(self, test_async_db, chat_session) -> None:
        """Test the (session_id, sequence) unique constraint."""
        # Arrange
        await _add(test_async_db, chat_session.id, 1)
        await test_async_db.commit()

        # Act & Assert
        with pytest.raises(IntegrityError):
            await _add(test_async_db, chat_session.id, 1)
        await test_async_db.rollback()

    @pytest.mark.asyncio
    async def test_context_round_trips_as_variant(self, test_async_db, chat_session) -> None:
        """Test client metadata is stored and parsed back as ClientMetadata."""
        # Arrange
        payload = ClientMetadata(extra={"client": "web"})

        # Act
        message = await _add(
            test_async_db,
            chat_session.id,
            1,
            context=MessageModel.serialize_context(payload),
        )
        await test_async_db.commit()
        await test_async_db.refresh(message)

        # Assert
        assert message.context == {"source": "client", "extra": {"client": "web"}}
        assert message.context_payload == payload
