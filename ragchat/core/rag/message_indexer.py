"""
Chat message indexing.

Makes persisted chat turns searchable under the "chat-message" provenance.
Indexing runs on the worker pool; failures are logged and counted there
and never reach the message path.

Dependencies: fastapi.concurrency, ragchat.boundary.vdb, ragchat.workers
System role: Off-path indexing of conversation turns
"""

import asyncio
import logging

from fastapi.concurrency import run_in_threadpool

from ragchat.boundary.db.models.message_model import MessageModel
from ragchat.boundary.vdb.vector_schemas import (
    SOURCE_CHAT_MESSAGE,
    ChunkMetadata,
    IndexItem,
    VectorIndex,
)
from ragchat.observability.log_utils import log_exception_with_context
from ragchat.observability.metrics import INDEXING_FAILURES
from ragchat.workers.indexing_pool import IndexingJob, IndexingWorkerPool

logger = logging.getLogger(__name__)

JOB_KIND = "chat-message"


def build_message_item(message: MessageModel) -> IndexItem | None:
    """
    Index item for a chat message, or None for blank content.

    Args:
        message: Persisted message (id assigned)

    Returns:
        IndexItem | None
    """
    if not message.content or not message.content.strip():
        return None
    return IndexItem(
        text=message.content,
        metadata=ChunkMetadata(
            session_id=str(message.session_id),
            source=SOURCE_CHAT_MESSAGE,
            message_id=str(message.id),
            sender=message.sender.value,
            sequence=message.sequence,
        ),
    )


class MessageIndexer:
    """Queue chat messages for vector indexing."""

    def __init__(
        self,
        vector_index: VectorIndex,
        pool: IndexingWorkerPool,
        add_timeout_seconds: float = 60.0,
    ) -> None:
        self._vector_index = vector_index
        self._pool = pool
        self._add_timeout = add_timeout_seconds

    async def submit(self, message: MessageModel) -> None:
        """
        Queue a message for indexing. Never raises.

        Args:
            message: Persisted message
        """
        item = build_message_item(message)
        if item is None:
            logger.debug(f"{__name__}:submit - Skipping blank message {message.id}")
            return

        try:
            await self._pool.submit(
                IndexingJob(
                    name=f"message-{message.id}",
                    kind=JOB_KIND,
                    run=lambda: self._add(item),
                )
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:submit - Could not queue message for indexing",
                e,
                message_id=message.id,
                session_id=message.session_id,
            )
            INDEXING_FAILURES.labels(kind=JOB_KIND).inc()

    async def _add(self, item: IndexItem) -> None:
        await asyncio.wait_for(
            run_in_threadpool(self._vector_index.add, [item]),
            timeout=self._add_timeout,
        )
