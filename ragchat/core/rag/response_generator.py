"""
Response generation for a user turn.

Orchestrates retrieval, history selection, prompt assembly and the model
call, then persists exactly one AI message: the model's answer on success
or the fixed fallback text when the model step fails.

Dependencies: sqlalchemy, ragchat.boundary, ragchat.core.rag
System role: Message-path orchestration
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.message_crud import message_crud
from ragchat.boundary.db.models.message_model import MessageModel, MessageSender
from ragchat.boundary.llm.gemini_generator import TextGenerator
from ragchat.boundary.vdb.vector_schemas import RetrievedChunk
from ragchat.core.rag.context_retriever import ContextRetriever
from ragchat.core.rag.history_selector import select_history
from ragchat.core.rag.message_indexer import MessageIndexer
from ragchat.core.rag.prompt_assembler import DEFAULT_CONTEXT_CHAR_BUDGET, build_prompt
from ragchat.models.context import ContextDocument, RetrievalContext
from ragchat.observability.log_utils import log_exception_with_context, log_with_context
from ragchat.observability.metrics import GENERATION_FAILURES

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = "Failed to generate response"
SNIPPET_MAX_LENGTH = 500


def build_retrieval_context(chunks: Sequence[RetrievedChunk]) -> RetrievalContext | None:
    """
    Context payload recording the chunks used for an answer.

    Args:
        chunks: Retrieved chunks

    Returns:
        RetrievalContext, or None when no chunks were used
    """
    if not chunks:
        return None
    return RetrievalContext(
        documents=[
            ContextDocument(
                session_id=chunk.metadata.session_id,
                document_id=chunk.metadata.document_id,
                filename=chunk.metadata.filename,
                chunk_index=chunk.metadata.chunk_index,
                snippet=chunk.text[:SNIPPET_MAX_LENGTH],
                score=chunk.score,
            )
            for chunk in chunks
        ]
    )


class ResponseGenerator:
    """
    Produce and persist the AI reply to a user message.

    Usage:
        generator = ResponseGenerator(retriever, text_generator, indexer)
        ai_message = await generator.generate_response(db, user_message)
    """

    def __init__(
        self,
        retriever: ContextRetriever,
        text_generator: TextGenerator,
        indexer: MessageIndexer,
        history_limit: int = 3,
        char_budget: int = DEFAULT_CONTEXT_CHAR_BUDGET,
    ) -> None:
        """
        Initialize generator.

        Args:
            retriever: Session document retriever
            text_generator: Model client
            indexer: Chat message indexer
            history_limit: Prior messages kept per sender
            char_budget: Snippet character budget for the prompt
        """
        self._retriever = retriever
        self._text_generator = text_generator
        self._indexer = indexer
        self._history_limit = history_limit
        self._char_budget = char_budget

    async def generate_response(
        self,
        db: AsyncSession,
        user_message: MessageModel,
    ) -> MessageModel:
        """
        Generate, commit and queue for indexing the AI reply.

        Never raises for retrieval or model failures; those produce the
        fallback message. The user message is not modified. History is read
        before the model step, so a database error propagates instead of
        being stored as a fallback reply.

        Args:
            db: Database session of the current request
            user_message: Persisted user message being answered

        Returns:
            MessageModel: Committed AI message with sequence user.sequence + 1

        Raises:
            SQLAlchemyError: If reading the session history fails
        """
        session_id = user_message.session_id
        prior = await message_crud.get_by_session_ordered(db, session_id)
        history = select_history(prior, user_message.sequence, self._history_limit)
        try:
            chunks = await self._retriever.retrieve(user_message.content, session_id)
            prompt = build_prompt(user_message.content, chunks, history, self._char_budget)

            content = await self._text_generator.generate(prompt)
            context = build_retrieval_context(chunks)
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:generate_response - Model answered",
                session_id=session_id,
                chunks=len(chunks),
                history=len(history),
                response_length=len(content),
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:generate_response - Generation failed, storing fallback",
                e,
                session_id=session_id,
                sequence=user_message.sequence,
            )
            GENERATION_FAILURES.inc()
            content = FALLBACK_RESPONSE
            context = None

        ai_message = await message_crud.create(
            db,
            session_id=session_id,
            sender=MessageSender.AI,
            content=content,
            context=MessageModel.serialize_context(context),
            sequence=user_message.sequence + 1,
        )
        await db.commit()

        await self._indexer.submit(ai_message)
        return ai_message
