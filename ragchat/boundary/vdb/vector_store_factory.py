"""
Vector index factory.

Selects the vector index backend from VECTOR_STORE_STORE_TYPE.
Provides consistent interface regardless of underlying implementation.

Dependencies: langchain_core, langchain_google_genai, ragchat.configs
System role: Vector index instantiation and selection
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import InMemoryVectorStore
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from ragchat.boundary.vdb.faiss_index import FAISSVectorIndex
from ragchat.boundary.vdb.langchain_index import LangChainVectorIndex
from ragchat.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_embeddings(settings: VectorStoreSettings) -> Embeddings:
    """
    Create the embedding model.

    Vectors are requested at the configured dimension so they match the
    index created for it.

    Args:
        settings: Vector store settings

    Returns:
        Embeddings: Gemini embedding model
    """
    return GoogleGenerativeAIEmbeddings(
        model=settings.embedding_model,
        output_dimensionality=settings.embedding_dimension,
    )


def get_vector_index(
    settings: VectorStoreSettings,
    embeddings: Embeddings | None = None,
) -> LangChainVectorIndex:
    """
    Factory function to get the vector index for the configured store type.

    Args:
        settings: Vector store settings
        embeddings: Embedding model override (defaults to Gemini)

    Returns:
        LangChainVectorIndex: Configured vector index

    Raises:
        ValueError: If store_type is invalid
    """
    store_type = settings.store_type.lower()
    embeddings = embeddings or get_embeddings(settings)

    if store_type == "faiss":
        logger.info(f"{__name__}:get_vector_index - Creating FAISS vector index")
        return FAISSVectorIndex.load_or_create(
            embeddings,
            persist_directory=settings.persist_directory,
            dimension=settings.embedding_dimension,
            fetch_k=settings.fetch_k,
        )

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_index - Creating in-memory vector index")
        return LangChainVectorIndex(InMemoryVectorStore(embedding=embeddings))

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. Must be 'faiss' or 'memory'."
    )
