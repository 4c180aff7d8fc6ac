"""
FAISS vector index with local persistence.

Uses cosine similarity (inner product over L2-normalized vectors) so
scores are comparable with the in-memory store.

Dependencies: faiss, langchain_community.vectorstores
System role: Persistent vector index for single-node deployments
"""

import logging
from pathlib import Path
from typing import Any

import faiss
from langchain_community.docstore.in_memory import InMemoryDocstore
from langchain_community.vectorstores import FAISS
from langchain_community.vectorstores.utils import DistanceStrategy
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings

from ragchat.boundary.vdb.langchain_index import LangChainVectorIndex

logger = logging.getLogger(__name__)


class FAISSVectorIndex(LangChainVectorIndex):
    """LangChainVectorIndex over FAISS, saved to disk after every add."""

    def __init__(
        self,
        store: FAISS,
        persist_directory: str | None = None,
        fetch_k: int = 200,
    ) -> None:
        """
        Initialize FAISS index wrapper.

        Args:
            store: LangChain FAISS store
            persist_directory: Directory for index persistence (None disables saving)
            fetch_k: Minimum candidates fetched before metadata filtering
        """
        super().__init__(store)
        self._persist_dir = Path(persist_directory) if persist_directory else None
        self._fetch_k = fetch_k

    @classmethod
    def load_or_create(
        cls,
        embeddings: Embeddings,
        persist_directory: str,
        dimension: int,
        fetch_k: int = 200,
    ) -> "FAISSVectorIndex":
        """
        Load an existing index from disk or create an empty one.

        Args:
            embeddings: Embedding model
            persist_directory: Directory holding index.faiss/index.pkl
            dimension: Embedding dimension for a new index
            fetch_k: Minimum candidates fetched before metadata filtering

        Returns:
            FAISSVectorIndex: Ready-to-use index
        """
        persist_dir = Path(persist_directory)
        persist_dir.mkdir(parents=True, exist_ok=True)

        if (persist_dir / "index.faiss").exists():
            logger.info(f"{__name__}:load_or_create - Loading FAISS index from {persist_dir}")
            store = FAISS.load_local(
                str(persist_dir),
                embeddings,
                allow_dangerous_deserialization=True,
                normalize_L2=True,
                distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
            )
        else:
            logger.info(f"{__name__}:load_or_create - Creating empty FAISS index (dim={dimension})")
            store = FAISS(
                embedding_function=embeddings,
                index=faiss.IndexFlatIP(dimension),
                docstore=InMemoryDocstore(),
                index_to_docstore_id={},
                normalize_L2=True,
                distance_strategy=DistanceStrategy.MAX_INNER_PRODUCT,
            )

        return cls(store, persist_directory=str(persist_dir), fetch_k=fetch_k)

    def _add_vectors(self, documents: list[Document], vectors: list[list[float]]) -> None:
        self._store.add_embeddings(
            list(zip([doc.page_content for doc in documents], vectors, strict=True)),
            metadatas=[doc.metadata for doc in documents],
        )

    def _search_options(self) -> dict[str, Any]:
        """
        Candidate pool for filtered search.

        FAISS filters metadata after the nearest-neighbour pass, so the pool
        spans the whole flat index; otherwise a session with few chunks is
        crowded out by other sessions' nearer vectors.
        """
        return {"fetch_k": max(self._fetch_k, self._store.index.ntotal)}

    def _build_filter(self, session_id: str, source: str) -> Any:
        """FAISS filters on the metadata dict."""
        return {"session_id": session_id, "source": source}

    def _after_add(self) -> None:
        if self._persist_dir is not None:
            self._store.save_local(str(self._persist_dir))
