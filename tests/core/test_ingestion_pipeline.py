"""
Test suite for DocumentIngestionPipeline.

Runs the pipeline against in-memory SQLite with stub or real extractors
and the fake-embedding vector index.

System role: Verification of the document indexing state machine
"""

import uuid

import pytest

from ragchat.boundary.db.CRUD.document_crud import document_crud
from ragchat.boundary.db.models.document_model import DocumentModel, DocumentStatus
from ragchat.boundary.vdb.vector_schemas import SOURCE_SESSION_DOCUMENTS
from ragchat.core.document_processing.ingestion_pipeline import (
    DocumentIngestionPipeline,
    failure_message,
)
from ragchat.core.exceptions import ExtractionError


async def _document(db, session_id, storage_path="stored.txt", status=DocumentStatus.PROCESSING) -> DocumentModel:
    document = await document_crud.create(
        db,
        session_id=session_id,
        original_filename="notes.txt",
        content_type="text/plain",
        size_bytes=10,
        storage_path=storage_path,
        indexing_status=status,
    )
    await db.commit()
    return document


def _text(length: int) -> str:
    alphabet = "abcdefghijklmnopqrstuvwxyz"
    return "".join(alphabet[i % len(alphabet)] for i in range(length))


class TestIndexDocument:
    """Test suite for DocumentIngestionPipeline.index_document."""

    @pytest.mark.asyncio
    async def test_indexes_chunks_and_marks_ready(
        self, test_async_db, test_session_factory, chat_session, vector_index, make_extractor
    ) -> None:
        """Test extracted text is chunked, indexed with metadata and the row is READY."""
        # Arrange
        document = await _document(test_async_db, chat_session.id)
        pipeline = DocumentIngestionPipeline(
            test_session_factory, vector_index, extractor=make_extractor(text=_text(2500))
        )

        # Act
        await pipeline.index_document(document.id)

        # Assert
        await test_async_db.refresh(document)
        assert document.indexing_status == DocumentStatus.READY
        assert document.error_message is None

        hits = vector_index.search(_text(100), 10, str(chat_session.id), SOURCE_SESSION_DOCUMENTS)
        assert sorted(hit.metadata.chunk_index for hit in hits) == [0, 1, 2]
        assert {hit.metadata.document_id for hit in hits} == {str(document.id)}
        assert {hit.metadata.filename for hit in hits} == {"notes.txt"}

    @pytest.mark.asyncio
    async def test_blank_text_marks_ready_without_chunks(
        self, test_async_db, test_session_factory, chat_session, vector_index, make_extractor
    ) -> None:
        """Test a document with no text is READY with zero chunks."""
        # Arrange
        document = await _document(test_async_db, chat_session.id)
        pipeline = DocumentIngestionPipeline(
            test_session_factory, vector_index, extractor=make_extractor(text="  \n ")
        )

        # Act
        await pipeline.index_document(document.id)

        # Assert
        await test_async_db.refresh(document)
        assert document.indexing_status == DocumentStatus.READY
        assert vector_index.search("anything", 10, str(chat_session.id), SOURCE_SESSION_DOCUMENTS) == []

    @pytest.mark.asyncio
    async def test_extraction_error_marks_failed(
        self, test_async_db, test_session_factory, chat_session, vector_index, make_extractor, metric
    ) -> None:
        """Test extraction errors move the document to FAILED with the message."""
        # Arrange
        document = await _document(test_async_db, chat_session.id)
        extractor = make_extractor(error=ExtractionError("Failed to extract PDF: bad xref", "stored.txt"))
        pipeline = DocumentIngestionPipeline(test_session_factory, vector_index, extractor=extractor)
        labels = {"kind": "document"}
        before = metric("ragchat_indexing_failures_total", labels)

        # Act
        await pipeline.index_document(document.id)

        # Assert
        await test_async_db.refresh(document)
        assert document.indexing_status == DocumentStatus.FAILED
        assert document.error_message == "Failed to extract PDF: bad xref"
        assert metric("ragchat_indexing_failures_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_long_error_message_is_truncated(
        self, test_async_db, test_session_factory, chat_session, vector_index, make_extractor
    ) -> None:
        """Test persisted error messages are at most 500 characters."""
        # Arrange
        document = await _document(test_async_db, chat_session.id)
        extractor = make_extractor(error=RuntimeError("x" * 800))
        pipeline = DocumentIngestionPipeline(test_session_factory, vector_index, extractor=extractor)

        # Act
        await pipeline.index_document(document.id)

        # Assert
        await test_async_db.refresh(document)
        assert document.indexing_status == DocumentStatus.FAILED
        assert len(document.error_message) == 500

    @pytest.mark.asyncio
    async def test_vector_index_failure_marks_failed(
        self, test_async_db, test_session_factory, chat_session, failing_vector_index, make_extractor
    ) -> None:
        """Test a failing bulk add moves the document to FAILED."""
        # Arrange
        document = await _document(test_async_db, chat_session.id)
        pipeline = DocumentIngestionPipeline(
            test_session_factory, failing_vector_index, extractor=make_extractor(text="some text")
        )

        # Act
        await pipeline.index_document(document.id)

        # Assert
        await test_async_db.refresh(document)
        assert document.indexing_status == DocumentStatus.FAILED
        assert document.error_message == "vector store unavailable"

    @pytest.mark.asyncio
    async def test_rerun_clears_previous_failure(
        self, test_async_db, test_session_factory, chat_session, vector_index, make_extractor
    ) -> None:
        """Test indexing a FAILED document again can reach READY."""
        # Arrange
        document = await _document(test_async_db, chat_session.id)
        failing = DocumentIngestionPipeline(
            test_session_factory, vector_index, extractor=make_extractor(error=RuntimeError("boom"))
        )
        await failing.index_document(document.id)
        working = DocumentIngestionPipeline(
            test_session_factory, vector_index, extractor=make_extractor(text="recovered text")
        )

        # Act
        await working.index_document(document.id)

        # Assert
        await test_async_db.refresh(document)
        assert document.indexing_status == DocumentStatus.READY
        assert document.error_message is None

    @pytest.mark.asyncio
    async def test_missing_document_is_ignored(
        self, test_session_factory, vector_index, make_extractor
    ) -> None:
        """Test an unknown document id is logged and skipped."""
        # Arrange
        extractor = make_extractor(text="unused")
        pipeline = DocumentIngestionPipeline(test_session_factory, vector_index, extractor=extractor)

        # Act
        await pipeline.index_document(uuid.uuid4())

        # Assert
        assert extractor.calls == []

    @pytest.mark.asyncio
    async def test_real_extractor_reads_stored_text_file(
        self, test_async_db, test_session_factory, chat_session, vector_index, tmp_path
    ) -> None:
        """Test the default extractor indexes a UTF-8 text file."""
        # Arrange
        path = tmp_path / "lecture.txt"
        path.write_text("Entropy always increases in an isolated system.", encoding="utf-8")
        document = await _document(test_async_db, chat_session.id, storage_path=str(path))
        pipeline = DocumentIngestionPipeline(test_session_factory, vector_index)

        # Act
        await pipeline.index_document(document.id)

        # Assert
        await test_async_db.refresh(document)
        assert document.indexing_status == DocumentStatus.READY
        hits = vector_index.search("entropy", 5, str(chat_session.id), SOURCE_SESSION_DOCUMENTS)
        assert hits[0].text == "Entropy always increases in an isolated system."

    @pytest.mark.asyncio
    async def test_real_extractor_missing_file_marks_failed(
        self, test_async_db, test_session_factory, chat_session, vector_index, tmp_path
    ) -> None:
        """Test a stored path that no longer exists fails the document."""
        # Arrange
        document = await _document(
            test_async_db, chat_session.id, storage_path=str(tmp_path / "gone.txt")
        )
        pipeline = DocumentIngestionPipeline(test_session_factory, vector_index)

        # Act
        await pipeline.index_document(document.id)

        # Assert
        await test_async_db.refresh(document)
        assert document.indexing_status == DocumentStatus.FAILED
        assert document.error_message.startswith("File not found")


class TestFailureMessage:
    """Test suite for failure_message."""

    def test_uses_exception_message(self) -> None:
        assert failure_message(ValueError("bad input")) == "bad input"

    def test_uses_type_name_when_message_empty(self) -> None:
        assert failure_message(RuntimeError()) == "RuntimeError"

    def test_uses_application_message_without_details(self) -> None:
        """Test details of application errors are not persisted."""
        exc = ExtractionError("Failed to extract text file: boom", "/tmp/x")
        assert failure_message(exc) == "Failed to extract text file: boom"
