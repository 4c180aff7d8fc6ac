"""
Test suite for ResponseGenerator.

Uses in-memory SQLite, the fake-embedding vector index and a stub model.

System role: Verification of reply generation, fallback and message indexing
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.message_crud import message_crud
from ragchat.boundary.db.models.message_model import MessageModel, MessageSender
from ragchat.boundary.vdb.vector_schemas import (
    SOURCE_CHAT_MESSAGE,
    SOURCE_SESSION_DOCUMENTS,
    ChunkMetadata,
    IndexItem,
)
from ragchat.core.rag.context_retriever import ContextRetriever
from ragchat.core.rag.message_indexer import MessageIndexer
from ragchat.core.rag.response_generator import FALLBACK_RESPONSE, ResponseGenerator
from ragchat.models.context import RetrievalContext


async def _user_message(
    db: AsyncSession,
    session_id: uuid.UUID,
    content: str,
    sequence: int,
    sender: MessageSender = MessageSender.USER,
) -> MessageModel:
    message = await message_crud.create(
        db,
        session_id=session_id,
        sender=sender,
        content=content,
        sequence=sequence,
    )
    await db.commit()
    return message


def _generator(vector_index, text_generator, pool, indexer_index=None) -> ResponseGenerator:
    return ResponseGenerator(
        retriever=ContextRetriever(vector_index),
        text_generator=text_generator,
        indexer=MessageIndexer(indexer_index or vector_index, pool),
        history_limit=3,
    )


class TestGenerateResponse:
    """Test suite for ResponseGenerator.generate_response."""

    @pytest.mark.asyncio
    async def test_success_persists_reply_with_next_sequence(
        self, test_async_db, chat_session, vector_index, stub_generator, indexing_pool
    ) -> None:
        """Test the reply carries the model text and sequence + 1."""
        # Arrange
        user_message = await _user_message(test_async_db, chat_session.id, "What is RAG?", 1)
        generator = _generator(vector_index, stub_generator, indexing_pool)

        # Act
        reply = await generator.generate_response(test_async_db, user_message)

        # Assert
        assert reply.sender == MessageSender.AI
        assert reply.content == "Generated answer"
        assert reply.sequence == 2
        assert reply.context is None
        assert "User question:\nWhat is RAG?\n\n" in stub_generator.prompts[0]

    @pytest.mark.asyncio
    async def test_success_records_retrieved_chunks_as_context(
        self, test_async_db, chat_session, vector_index, stub_generator, indexing_pool
    ) -> None:
        """Test retrieved chunks are stored with snippets capped at 500 chars."""
        # Arrange
        document_id = str(uuid.uuid4())
        vector_index.add(
            [
                IndexItem(
                    text="photosynthesis " * 100,
                    metadata=ChunkMetadata(
                        session_id=str(chat_session.id),
                        source=SOURCE_SESSION_DOCUMENTS,
                        document_id=document_id,
                        filename="biology.pdf",
                        chunk_index=0,
                    ),
                )
            ]
        )
        user_message = await _user_message(test_async_db, chat_session.id, "photosynthesis", 1)
        generator = _generator(vector_index, stub_generator, indexing_pool)

        # Act
        reply = await generator.generate_response(test_async_db, user_message)

        # Assert
        context = reply.context_payload
        assert isinstance(context, RetrievalContext)
        assert context.source == "session-documents"
        assert len(context.documents) == 1
        document = context.documents[0]
        assert document.document_id == document_id
        assert document.filename == "biology.pdf"
        assert document.chunk_index == 0
        assert len(document.snippet) == 500
        assert document.score is not None
        assert "Context:\n[1] " in stub_generator.prompts[0]

    @pytest.mark.asyncio
    async def test_model_failure_stores_fallback_without_context(
        self, test_async_db, chat_session, vector_index, failing_generator, indexing_pool, metric
    ) -> None:
        """Test a failing model yields the fallback reply and is counted."""
        # Arrange
        user_message = await _user_message(test_async_db, chat_session.id, "Hello", 1)
        generator = _generator(vector_index, failing_generator, indexing_pool)
        before = metric("ragchat_generation_failures_total")

        # Act
        reply = await generator.generate_response(test_async_db, user_message)

        # Assert
        assert reply.content == FALLBACK_RESPONSE
        assert reply.context is None
        assert reply.sequence == user_message.sequence + 1
        assert metric("ragchat_generation_failures_total") == before + 1

    @pytest.mark.asyncio
    async def test_retrieval_failure_still_answers(
        self, test_async_db, chat_session, failing_vector_index, stub_generator, indexing_pool
    ) -> None:
        """Test the model is still called when retrieval fails."""
        # Arrange
        user_message = await _user_message(test_async_db, chat_session.id, "Hello", 1)
        generator = _generator(failing_vector_index, stub_generator, indexing_pool)

        # Act
        reply = await generator.generate_response(test_async_db, user_message)

        # Assert
        assert reply.content == "Generated answer"
        assert reply.context is None
        assert "Context:" not in stub_generator.prompts[0]

    @pytest.mark.asyncio
    async def test_prompt_contains_prior_turns(
        self, test_async_db, chat_session, vector_index, stub_generator, indexing_pool
    ) -> None:
        """Test history before the current message is included."""
        # Arrange
        await _user_message(test_async_db, chat_session.id, "My name is Ada", 1)
        await _user_message(test_async_db, chat_session.id, "Nice to meet you", 2, MessageSender.AI)
        user_message = await _user_message(test_async_db, chat_session.id, "What is my name?", 3)
        generator = _generator(vector_index, stub_generator, indexing_pool)

        # Act
        await generator.generate_response(test_async_db, user_message)

        # Assert
        prompt = stub_generator.prompts[0]
        assert "User: My name is Ada\nAssistant: Nice to meet you\n\n" in prompt
        assert "User: What is my name?" not in prompt

    @pytest.mark.asyncio
    async def test_reply_is_indexed_as_chat_message(
        self, test_async_db, chat_session, vector_index, stub_generator, indexing_pool
    ) -> None:
        """Test the reply is added to the index with chat-message provenance."""
        # Arrange
        user_message = await _user_message(test_async_db, chat_session.id, "Hi", 1)
        generator = _generator(vector_index, stub_generator, indexing_pool)

        # Act
        reply = await generator.generate_response(test_async_db, user_message)
        await indexing_pool.join()

        # Assert
        hits = vector_index.search("Generated answer", 5, str(chat_session.id), SOURCE_CHAT_MESSAGE)
        assert [hit.metadata.message_id for hit in hits] == [str(reply.id)]
        assert hits[0].metadata.sender == "AI"
        assert hits[0].metadata.sequence == 2

    @pytest.mark.asyncio
    async def test_indexing_failure_does_not_affect_reply(
        self,
        test_async_db,
        chat_session,
        vector_index,
        failing_vector_index,
        stub_generator,
        indexing_pool,
        metric,
    ) -> None:
        """Test a failing index write is counted and the reply stays persisted."""
        # Arrange
        user_message = await _user_message(test_async_db, chat_session.id, "Hi", 1)
        generator = _generator(vector_index, stub_generator, indexing_pool, failing_vector_index)
        labels = {"kind": "chat-message"}
        before = metric("ragchat_indexing_failures_total", labels)

        # Act
        reply = await generator.generate_response(test_async_db, user_message)
        await indexing_pool.join()

        # Assert
        stored = await message_crud.get_by_session_ordered(test_async_db, chat_session.id)
        assert [m.id for m in stored] == [user_message.id, reply.id]
        assert metric("ragchat_indexing_failures_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_history_read_failure_propagates_without_fallback(
        self,
        test_async_db,
        chat_session,
        vector_index,
        stub_generator,
        indexing_pool,
        metric,
        monkeypatch,
    ) -> None:
        """Test a database error while reading history is not stored as a fallback reply."""
        # Arrange
        user_message = await _user_message(test_async_db, chat_session.id, "Hello", 1)
        generator = _generator(vector_index, stub_generator, indexing_pool)
        monkeypatch.setattr(
            message_crud,
            "get_by_session_ordered",
            AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("database is locked"))),
        )
        before = metric("ragchat_generation_failures_total")

        # Act / Assert
        with pytest.raises(OperationalError):
            await generator.generate_response(test_async_db, user_message)
        assert stub_generator.prompts == []
        assert metric("ragchat_generation_failures_total") == before
