"""
Vector store configuration settings.

Manages the vector index backend, embedding model and search bounds
used by context retrieval and indexing.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (FAISS on disk, or in-memory for local runs)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="faiss",
        description="Vector store type: 'faiss' (persisted) or 'memory'",
    )
    persist_directory: str = Field(
        default=".faiss_index",
        description="Directory for FAISS index persistence",
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=3072,
        description="Embedding vector dimension, used to create an empty FAISS index",
    )

    top_k: int = Field(default=5, description="Number of context chunks to retrieve")
    fetch_k: int = Field(
        default=200,
        description="Minimum candidates fetched before metadata filtering (FAISS only)",
    )
    search_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound for a single similarity search",
    )
    add_timeout_seconds: float = Field(
        default=60.0,
        description="Upper bound for a single bulk add",
    )
