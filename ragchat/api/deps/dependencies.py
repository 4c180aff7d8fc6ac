"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(vector index, model client, worker pool) live in a ServiceCache held on
app.state; request-scoped services are built per request around the
injected database session.

Dependencies: ragchat.configs, ragchat.application, ragchat.boundary, ragchat.core
System role: DI container for service injection
"""

from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ragchat.application.services import (
    DocumentService,
    MessageService,
    SessionLockRegistry,
    SessionService,
)
from ragchat.boundary.db import get_async_db, get_async_session_factory
from ragchat.boundary.llm.gemini_generator import GeminiTextGenerator, TextGenerator
from ragchat.boundary.storage.local_storage import LocalDocumentStorage
from ragchat.boundary.vdb.vector_schemas import VectorIndex
from ragchat.boundary.vdb.vector_store_factory import get_vector_index
from ragchat.configs import Settings, get_settings
from ragchat.core.document_processing.ingestion_pipeline import DocumentIngestionPipeline
from ragchat.core.document_processing.text_extractor import TextExtractor
from ragchat.core.exceptions import ValidationError
from ragchat.core.rag.context_retriever import ContextRetriever
from ragchat.core.rag.message_indexer import MessageIndexer
from ragchat.core.rag.response_generator import ResponseGenerator
from ragchat.workers.indexing_pool import IndexingWorkerPool


class ServiceCache:
    """
    Container for cached service instances.

    Every collaborator can be passed in to replace the configured default.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        vector_index: VectorIndex | None = None,
        text_generator: TextGenerator | None = None,
        extractor: TextExtractor | None = None,
        storage: LocalDocumentStorage | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        pool: IndexingWorkerPool | None = None,
    ) -> None:
        self._settings = settings
        self._vector_index = vector_index
        self._text_generator = text_generator
        self._extractor = extractor
        self._storage = storage
        self._session_factory = session_factory
        self._pool = pool
        self._pipeline = None
        self._indexer = None
        self._response_generator = None
        self._locks = SessionLockRegistry()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def vector_index(self) -> VectorIndex:
        """Get cached vector index."""
        if self._vector_index is None:
            self._vector_index = get_vector_index(self.settings.vector_store)
        return self._vector_index

    @property
    def text_generator(self) -> TextGenerator:
        """Get cached model client."""
        if self._text_generator is None:
            llm = self.settings.llm
            self._text_generator = GeminiTextGenerator(
                model_id=llm.model_id,
                temperature=llm.temperature,
                timeout_seconds=llm.timeout_seconds,
            )
        return self._text_generator

    @property
    def storage(self) -> LocalDocumentStorage:
        if self._storage is None:
            self._storage = LocalDocumentStorage(root=self.settings.storage.root)
        return self._storage

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = get_async_session_factory()
        return self._session_factory

    @property
    def pool(self) -> IndexingWorkerPool:
        """Get the shared indexing worker pool."""
        if self._pool is None:
            worker = self.settings.worker
            self._pool = IndexingWorkerPool(
                size=worker.pool_size,
                max_queue_size=worker.max_queue_size,
            )
        return self._pool

    @property
    def pipeline(self) -> DocumentIngestionPipeline:
        """Get cached document ingestion pipeline."""
        if self._pipeline is None:
            self._pipeline = DocumentIngestionPipeline(
                session_factory=self.session_factory,
                vector_index=self.vector_index,
                extractor=self._extractor,
                add_timeout_seconds=self.settings.vector_store.add_timeout_seconds,
            )
        return self._pipeline

    @property
    def indexer(self) -> MessageIndexer:
        if self._indexer is None:
            self._indexer = MessageIndexer(
                vector_index=self.vector_index,
                pool=self.pool,
                add_timeout_seconds=self.settings.vector_store.add_timeout_seconds,
            )
        return self._indexer

    @property
    def response_generator(self) -> ResponseGenerator:
        """Get cached response generator."""
        if self._response_generator is None:
            vs = self.settings.vector_store
            retriever = ContextRetriever(
                self.vector_index,
                top_k=vs.top_k,
                timeout_seconds=vs.search_timeout_seconds,
            )
            self._response_generator = ResponseGenerator(
                retriever=retriever,
                text_generator=self.text_generator,
                indexer=self.indexer,
                history_limit=self.settings.chat.history_previous_messages,
                char_budget=self.settings.chat.context_char_budget,
            )
        return self._response_generator

    @property
    def locks(self) -> SessionLockRegistry:
        return self._locks


def get_service_cache(request: Request) -> ServiceCache:
    """Service cache of the running application."""
    return request.app.state.service_cache


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> UUID | None:
    """
    Caller identity from the X-User-Id header set by the gateway.

    Returns:
        UUID | None: Owner id, or None when the header is absent

    Raises:
        ValidationError: If the header is not a UUID
    """
    if x_user_id is None:
        return None
    try:
        return UUID(x_user_id)
    except ValueError as e:
        raise ValidationError("X-User-Id must be a UUID", field="X-User-Id") from e


def get_required_user_id(user_id: UUID | None = Depends(get_current_user_id)) -> UUID:
    """
    Caller identity for owner-scoped routes.

    Every session, message and document route requires it so lookups are
    always filtered by owner.

    Raises:
        ValidationError: If the X-User-Id header is absent
    """
    if user_id is None:
        raise ValidationError("X-User-Id header is required", field="X-User-Id")
    return user_id


def get_session_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)
        cache: Application service cache

    Returns:
        SessionService: Session service instance
    """
    return SessionService(db=db, storage=cache.storage)


def get_message_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> MessageService:
    """Get message service instance."""
    return MessageService(
        db=db,
        response_generator=cache.response_generator,
        indexer=cache.indexer,
        locks=cache.locks,
    )


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> DocumentService:
    """Get document service instance."""
    return DocumentService(
        db=db,
        storage=cache.storage,
        pipeline=cache.pipeline,
        pool=cache.pool,
    )
