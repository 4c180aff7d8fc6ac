"""
Session document context retrieval.

Searches the vector index for chunks of the session's uploaded documents.
Retrieval is best-effort: failures degrade to an empty context.

Dependencies: fastapi.concurrency, ragchat.boundary.vdb
System role: Retrieval stage of the message pipeline
"""

import asyncio
import logging
from uuid import UUID

from fastapi.concurrency import run_in_threadpool

from ragchat.boundary.vdb.vector_schemas import SOURCE_SESSION_DOCUMENTS, RetrievedChunk, VectorIndex
from ragchat.observability.log_utils import log_exception_with_context
from ragchat.observability.metrics import RETRIEVAL_FAILURES

logger = logging.getLogger(__name__)


class ContextRetriever:
    """Fetch the most relevant document chunks for a user utterance."""

    def __init__(
        self,
        vector_index: VectorIndex,
        top_k: int = 5,
        timeout_seconds: float = 10.0,
    ) -> None:
        """
        Initialize retriever.

        Args:
            vector_index: Index to search
            top_k: Maximum chunks returned
            timeout_seconds: Upper bound for one search
        """
        self._vector_index = vector_index
        self._top_k = top_k
        self._timeout = timeout_seconds

    async def retrieve(self, query: str, session_id: UUID) -> list[RetrievedChunk]:
        """
        Search the session's document chunks.

        Args:
            query: User utterance
            session_id: Session whose documents are searched

        Returns:
            list[RetrievedChunk]: Up to top_k chunks, best first; empty on failure
        """
        try:
            chunks = await asyncio.wait_for(
                run_in_threadpool(
                    self._vector_index.search,
                    query,
                    self._top_k,
                    str(session_id),
                    SOURCE_SESSION_DOCUMENTS,
                ),
                timeout=self._timeout,
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:retrieve - Retrieval failed, continuing without context",
                e,
                level=logging.WARNING,
                session_id=session_id,
            )
            RETRIEVAL_FAILURES.inc()
            return []

        logger.debug(f"{__name__}:retrieve - Retrieved {len(chunks)} chunks for session {session_id}")
        return chunks[: self._top_k]
