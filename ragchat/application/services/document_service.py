"""
Document service orchestrator.

Coordinates session document upload, listing, deletion and re-indexing.
Uploads return as soon as the file is stored; indexing runs on the
worker pool and its outcome is recorded on the document row.

Dependencies: ragchat.boundary.db, ragchat.boundary.storage, ragchat.core.document_processing, ragchat.workers
System role: Document management orchestration
"""

import logging
from typing import Sequence
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.document_crud import document_crud
from ragchat.boundary.db.CRUD.session_crud import session_crud
from ragchat.boundary.db.models.document_model import DocumentModel, DocumentStatus
from ragchat.boundary.storage.local_storage import LocalDocumentStorage
from ragchat.core.document_processing.ingestion_pipeline import DocumentIngestionPipeline
from ragchat.core.exceptions import (
    DocumentNotFoundError,
    SessionNotFoundError,
    StorageError,
    ValidationError,
)
from ragchat.observability.log_utils import log_with_context
from ragchat.workers.indexing_pool import IndexingJob, IndexingWorkerPool

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "document"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
FILENAME_MAX_LENGTH = 255
SAVE_FAILED_MESSAGE = "Failed to save uploaded file"
JOB_KIND = "document"


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle: upload, listing, deletion, re-indexing.
    """

    def __init__(
        self,
        db: AsyncSession,
        storage: LocalDocumentStorage,
        pipeline: DocumentIngestionPipeline,
        pool: IndexingWorkerPool,
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document metadata tracking
            storage: Stores uploaded bytes
            pipeline: Indexes stored documents
            pool: Worker pool running indexing jobs
        """
        self.db = db
        self._storage = storage
        self._pipeline = pipeline
        self._pool = pool

    async def upload_document(
        self,
        session_id: UUID,
        filename: str | None,
        content_type: str | None,
        data: bytes,
        *,
        user_id: UUID | None = None,
    ) -> DocumentModel:
        """
        Store an uploaded file and queue it for indexing.

        Args:
            session_id: Target session
            filename: Original filename ("document" when missing)
            content_type: MIME type ("application/octet-stream" when missing)
            data: File contents
            user_id: Owner scope for the session lookup

        Returns:
            DocumentModel: Document in PROCESSING state

        Raises:
            ValidationError: Empty file (no row is created)
            SessionNotFoundError: Session missing or not owned by user_id
            StorageError: File could not be written (row is FAILED)
        """
        if not data:
            raise ValidationError("Uploaded file is empty", field="file")
        await self._ensure_session(session_id, user_id)

        filename = (filename or DEFAULT_FILENAME)[:FILENAME_MAX_LENGTH]
        content_type = content_type or DEFAULT_CONTENT_TYPE

        document = await document_crud.create(
            self.db,
            session_id=session_id,
            original_filename=filename,
            content_type=content_type,
            size_bytes=len(data),
            storage_path="",
            indexing_status=DocumentStatus.PENDING,
        )
        await self.db.commit()

        try:
            path = await run_in_threadpool(
                self._storage.save, session_id, document.id, filename, data
            )
        except StorageError:
            logger.error(f"{__name__}:upload_document - Storage failed for document {document.id}")
            await document_crud.mark_failed(self.db, document, SAVE_FAILED_MESSAGE)
            await self.db.commit()
            raise

        document = await document_crud.mark_processing(self.db, document, storage_path=path)
        await self.db.commit()

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:upload_document - Document stored, queuing indexing",
            document_id=document.id,
            session_id=session_id,
            size_bytes=len(data),
        )
        await self._submit(document.id)
        return document

    async def list_documents(
        self,
        session_id: UUID,
        *,
        user_id: UUID | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Documents of a session, newest first.

        Raises:
            SessionNotFoundError: Session missing or not owned by user_id
        """
        await self._ensure_session(session_id, user_id)
        return await document_crud.get_by_session_id(self.db, session_id)

    async def delete_document(
        self,
        session_id: UUID,
        document_id: UUID,
        *,
        user_id: UUID | None = None,
    ) -> None:
        """
        Delete a document row and its stored file.

        Chunks already in the vector index are not removed and remain
        retrievable for the session.

        Raises:
            SessionNotFoundError: Session missing or not owned by user_id
            DocumentNotFoundError: Document not in this session
        """
        document = await self._load(session_id, document_id, user_id)
        await run_in_threadpool(self._storage.delete, document.storage_path)
        await document_crud.delete(self.db, document)
        await self.db.commit()
        logger.info(f"{__name__}:delete_document - Deleted document {document_id}")

    async def reindex_document(
        self,
        session_id: UUID,
        document_id: UUID,
        *,
        user_id: UUID | None = None,
    ) -> DocumentModel:
        """
        Queue a document for indexing again, whatever its current state.

        Used for documents left in PROCESSING or to retry FAILED ones.

        Raises:
            SessionNotFoundError: Session missing or not owned by user_id
            DocumentNotFoundError: Document not in this session
        """
        document = await self._load(session_id, document_id, user_id)
        log_with_context(
            logger,
            logging.WARNING,
            f"{__name__}:reindex_document - Re-indexing requested",
            document_id=document_id,
            session_id=session_id,
            previous_status=document.indexing_status.value,
        )
        await self._submit(document.id)
        return document

    async def _submit(self, document_id: UUID) -> None:
        pipeline = self._pipeline
        await self._pool.submit(
            IndexingJob(
                name=f"document-{document_id}",
                kind=JOB_KIND,
                run=lambda: pipeline.index_document(document_id),
            )
        )

    async def _ensure_session(self, session_id: UUID, user_id: UUID | None) -> None:
        session = await session_crud.get_for_user(self.db, session_id, user_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))

    async def _load(
        self,
        session_id: UUID,
        document_id: UUID,
        user_id: UUID | None,
    ) -> DocumentModel:
        await self._ensure_session(session_id, user_id)
        document = await document_crud.get_in_session(self.db, document_id, session_id)
        if document is None:
            raise DocumentNotFoundError(str(document_id))
        return document
