"""
Vector index boundary.

Exports the chunk schemas, the VectorIndex contract and its LangChain
implementations.
"""

from ragchat.boundary.vdb.faiss_index import FAISSVectorIndex
from ragchat.boundary.vdb.langchain_index import LangChainVectorIndex
from ragchat.boundary.vdb.vector_schemas import (
    SOURCE_CHAT_MESSAGE,
    SOURCE_SESSION_DOCUMENTS,
    ChunkMetadata,
    IndexItem,
    RetrievedChunk,
    VectorIndex,
)
from ragchat.boundary.vdb.vector_store_factory import get_vector_index

__all__ = [
    "SOURCE_CHAT_MESSAGE",
    "SOURCE_SESSION_DOCUMENTS",
    "ChunkMetadata",
    "IndexItem",
    "RetrievedChunk",
    "VectorIndex",
    "LangChainVectorIndex",
    "FAISSVectorIndex",
    "get_vector_index",
]
