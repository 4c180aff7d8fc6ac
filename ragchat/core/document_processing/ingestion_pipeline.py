"""
Document ingestion pipeline.

Runs the indexing half of the document state machine:
PENDING/PROCESSING -> PROCESSING -> READY | FAILED.
Each run opens its own database session since it executes on the worker
pool, outside the request that uploaded the document.

Dependencies: sqlalchemy, fastapi.concurrency, ragchat.boundary
System role: Background document indexing
"""

import asyncio
import logging
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ragchat.boundary.db.CRUD.document_crud import ERROR_MESSAGE_MAX_LENGTH, document_crud
from ragchat.boundary.db.models.document_model import DocumentModel
from ragchat.boundary.vdb.vector_schemas import (
    SOURCE_SESSION_DOCUMENTS,
    ChunkMetadata,
    IndexItem,
    VectorIndex,
)
from ragchat.core.document_processing.chunker import SlidingWindowChunker
from ragchat.core.document_processing.text_extractor import TextExtractor
from ragchat.core.exceptions import RagChatException
from ragchat.observability.log_utils import log_exception_with_context, log_with_context
from ragchat.observability.metrics import CHUNKS_INDEXED, DOCUMENTS_INDEXED, INDEXING_FAILURES

logger = logging.getLogger(__name__)


def failure_message(exc: BaseException) -> str:
    """
    Error text persisted on a FAILED document.

    Uses the exception message, or its type name when the message is empty,
    truncated to the column width.
    """
    if isinstance(exc, RagChatException):
        message = exc.message
    else:
        message = str(exc)
    if not message:
        message = type(exc).__name__
    return message[:ERROR_MESSAGE_MAX_LENGTH]


class DocumentIngestionPipeline:
    """
    Extract, chunk and index one stored document.

    Usage:
        pipeline = DocumentIngestionPipeline(session_factory, vector_index)
        await pipeline.index_document(document_id)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        vector_index: VectorIndex,
        extractor: TextExtractor | None = None,
        chunker: SlidingWindowChunker | None = None,
        extract_timeout_seconds: float = 120.0,
        add_timeout_seconds: float = 60.0,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            session_factory: Factory for the run's own database session
            vector_index: Index receiving the chunks
            extractor: Text extractor (default TextExtractor)
            chunker: Chunker (default 1000/200 sliding window)
            extract_timeout_seconds: Upper bound for text extraction
            add_timeout_seconds: Upper bound for the bulk add
        """
        self._session_factory = session_factory
        self._vector_index = vector_index
        self._extractor = extractor or TextExtractor()
        self._chunker = chunker or SlidingWindowChunker()
        self._extract_timeout = extract_timeout_seconds
        self._add_timeout = add_timeout_seconds

    async def index_document(self, document_id: UUID) -> None:
        """
        Index a document and record the outcome on its row.

        A missing document is logged and ignored. Failures never propagate;
        they move the document to FAILED.

        Args:
            document_id: Document to index
        """
        async with self._session_factory() as db:
            document = await document_crud.get_by_id(db, document_id)
            if document is None:
                logger.warning(
                    f"{__name__}:index_document - Document {document_id} not found, skipping"
                )
                return

            session_id = document.session_id
            await document_crud.mark_processing(db, document)
            await db.commit()
            log_with_context(
                logger,
                logging.INFO,
                f"{__name__}:index_document - Indexing started",
                document_id=document_id,
                session_id=session_id,
            )

            try:
                chunk_count = await self._extract_and_index(document)
                await document_crud.mark_ready(db, document)
                await db.commit()
            except Exception as e:
                await db.rollback()
                log_exception_with_context(
                    logger,
                    f"{__name__}:index_document - Indexing failed",
                    e,
                    document_id=document_id,
                    session_id=session_id,
                )
                INDEXING_FAILURES.labels(kind="document").inc()
                await self._record_failure(db, document_id, failure_message(e))
                return

        DOCUMENTS_INDEXED.inc()
        CHUNKS_INDEXED.inc(chunk_count)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:index_document - Document READY",
            document_id=document_id,
            chunks=chunk_count,
        )

    async def _extract_and_index(self, document: DocumentModel) -> int:
        """Extract, chunk and add; returns the number of chunks added."""
        text = await asyncio.wait_for(
            run_in_threadpool(
                self._extractor.extract,
                document.storage_path,
                document.content_type,
            ),
            timeout=self._extract_timeout,
        )
        if not text or not text.strip():
            logger.info(
                f"{__name__}:_extract_and_index - No text in document {document.id}, nothing to index"
            )
            return 0

        chunks = self._chunker.chunk(text)
        items = [
            IndexItem(
                text=chunk.text,
                metadata=ChunkMetadata(
                    session_id=str(document.session_id),
                    source=SOURCE_SESSION_DOCUMENTS,
                    document_id=str(document.id),
                    filename=document.original_filename,
                    chunk_index=chunk.chunk_index,
                ),
            )
            for chunk in chunks
        ]
        if items:
            await asyncio.wait_for(
                run_in_threadpool(self._vector_index.add, items),
                timeout=self._add_timeout,
            )
        return len(items)

    async def _record_failure(
        self,
        db: AsyncSession,
        document_id: UUID,
        error_message: str,
    ) -> None:
        document = await document_crud.get_by_id(db, document_id)
        if document is None:
            return
        await document_crud.mark_failed(db, document, error_message)
        await db.commit()
