"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory database, fake-embedding vector index, stub model and
extractor, worker pool, file storage under tmp_path
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import uuid

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.vectorstores import InMemoryVectorStore
from prometheus_client import REGISTRY
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ragchat.boundary.db.base import Base
from ragchat.boundary.db.CRUD.session_crud import session_crud
from ragchat.boundary.db.models.session_model import SessionModel
from ragchat.boundary.storage.local_storage import LocalDocumentStorage
from ragchat.boundary.vdb.langchain_index import LangChainVectorIndex
from ragchat.core.exceptions import GenerationError
from ragchat.workers.indexing_pool import IndexingWorkerPool


class StubTextGenerator:
    """TextGenerator double recording prompts."""

    def __init__(self, response: str = "Generated answer", error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


class StubTextExtractor:
    """TextExtractor double returning fixed text or raising."""

    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[str] = []

    def extract(self, file_path: str, content_type: str | None = None) -> str:
        self.calls.append(file_path)
        if self.error is not None:
            raise self.error
        return self.text


class FailingVectorIndex:
    """VectorIndex double whose every call fails."""

    def search(self, query, top_k, session_id, source):
        raise RuntimeError("vector store unavailable")

    def add(self, items):
        raise RuntimeError("vector store unavailable")


def metric_value(name: str, labels: dict | None = None) -> float:
    """Current value of a prometheus sample, 0.0 when never recorded."""
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine sharing one connection through StaticPool
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def chat_session(test_async_db: AsyncSession) -> SessionModel:
    """Committed session owned by a random user."""
    session = await session_crud.create(
        test_async_db,
        user_id=uuid.uuid4(),
        session_name="Test Session",
    )
    await test_async_db.commit()
    return session


@pytest.fixture
def vector_index() -> LangChainVectorIndex:
    """In-memory vector index with deterministic fake embeddings."""
    return LangChainVectorIndex(InMemoryVectorStore(embedding=DeterministicFakeEmbedding(size=64)))


@pytest.fixture
async def indexing_pool():
    """Started worker pool, stopped after the test."""
    pool = IndexingWorkerPool(size=2)
    await pool.start()
    yield pool
    await pool.stop()


@pytest.fixture
def stub_generator() -> StubTextGenerator:
    return StubTextGenerator()


@pytest.fixture
def failing_generator() -> StubTextGenerator:
    return StubTextGenerator(error=GenerationError("Model call failed: RuntimeError"))


@pytest.fixture
def document_storage(tmp_path) -> LocalDocumentStorage:
    """File storage rooted in the test's temp directory."""
    return LocalDocumentStorage(root=str(tmp_path / "session-docs"))


@pytest.fixture
def make_extractor():
    """Factory for StubTextExtractor instances."""
    return StubTextExtractor


@pytest.fixture
def failing_vector_index() -> FailingVectorIndex:
    return FailingVectorIndex()


@pytest.fixture
def metric():
    """Reader for prometheus sample values."""
    return metric_value
