"""
Vector index backed by a LangChain VectorStore.

Wraps any LangChain VectorStore (InMemoryVectorStore, FAISS, ...) with the
session/provenance-filtered search and bulk add used by the RAG pipeline.

Embedding calls run outside the store lock; only the in-process store
mutation and the vector search itself are serialized.

Dependencies: langchain_core
System role: Vector index adapter
"""

import logging
import threading
import uuid
from typing import Any

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import VectorStore

from ragchat.boundary.vdb.vector_schemas import ChunkMetadata, IndexItem, RetrievedChunk
from ragchat.core.exceptions import IndexingError, RetrievalError

logger = logging.getLogger(__name__)


class LangChainVectorIndex:
    """
    VectorIndex implementation over a LangChain VectorStore.

    Store access is serialized with a lock since in-process stores are
    not safe for concurrent mutation. Texts are embedded before the lock
    is taken so a slow embedding call never blocks other sessions.
    """

    def __init__(self, store: VectorStore) -> None:
        """
        Initialize the index.

        Args:
            store: LangChain vector store holding embedded texts

        Raises:
            ValueError: If the store has no embedding model attached
        """
        if store.embeddings is None:
            raise ValueError("Vector store has no embedding model")
        self._store = store
        self._embeddings: Embeddings = store.embeddings
        self._lock = threading.Lock()

    @property
    def store(self) -> VectorStore:
        """Underlying LangChain store."""
        return self._store

    def add(self, items: list[IndexItem]) -> None:
        """
        Embed and add items to the store.

        Args:
            items: Texts with metadata; None-valued metadata keys are dropped

        Raises:
            IndexingError: If embedding fails or the store rejects the documents
        """
        if not items:
            return

        documents = [
            Document(
                page_content=item.text,
                metadata=item.metadata.model_dump(exclude_none=True),
            )
            for item in items
        ]
        try:
            vectors = self._embeddings.embed_documents(
                [doc.page_content for doc in documents]
            )
            with self._lock:
                self._add_vectors(documents, vectors)
                self._after_add()
        except Exception as e:
            raise IndexingError(
                f"Vector add failed: {type(e).__name__}",
                operation="add",
                details={"items": len(documents), "error": str(e)},
            ) from e

        logger.debug(f"{__name__}:add - Added {len(documents)} items")

    def search(
        self,
        query: str,
        top_k: int,
        session_id: str,
        source: str,
    ) -> list[RetrievedChunk]:
        """
        Similarity search restricted to one session and provenance.

        Args:
            query: Query text
            top_k: Maximum results
            session_id: Session the chunks must belong to
            source: Provenance tag the chunks must carry

        Returns:
            list[RetrievedChunk]: Results ordered best first

        Raises:
            RetrievalError: If embedding the query or the store search fails
        """
        try:
            vector = self._embeddings.embed_query(query)
            with self._lock:
                results = self._store.similarity_search_with_score_by_vector(
                    vector,
                    k=top_k,
                    filter=self._build_filter(session_id, source),
                    **self._search_options(),
                )
        except Exception as e:
            raise RetrievalError(
                f"Vector search failed: {type(e).__name__}",
                session_id=session_id,
                details={"source": source, "error": str(e)},
            ) from e

        return [
            RetrievedChunk(
                text=doc.page_content,
                score=float(score),
                metadata=ChunkMetadata.model_validate(doc.metadata),
            )
            for doc, score in results
        ]

    def _add_vectors(self, documents: list[Document], vectors: list[list[float]]) -> None:
        """Write pre-computed vectors into the in-memory store's records."""
        for doc, vector in zip(documents, vectors, strict=True):
            doc_id = str(uuid.uuid4())
            self._store.store[doc_id] = {
                "id": doc_id,
                "vector": vector,
                "text": doc.page_content,
                "metadata": doc.metadata,
            }

    def _search_options(self) -> dict[str, Any]:
        """Extra search keyword arguments, evaluated under the lock."""
        return {}

    def _build_filter(self, session_id: str, source: str) -> Any:
        """Filter in the form the wrapped store accepts (a Document predicate)."""

        def _matches(doc: Document) -> bool:
            return (
                doc.metadata.get("session_id") == session_id
                and doc.metadata.get("source") == source
            )

        return _matches

    def _after_add(self) -> None:
        """Hook run under the lock after each add."""
