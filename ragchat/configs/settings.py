"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from ragchat.configs.base import BaseSettings
from ragchat.configs.chat import ChatSettings
from ragchat.configs.database import DatabaseSettings
from ragchat.configs.llm import LLMSettings
from ragchat.configs.storage import StorageSettings
from ragchat.configs.vector_store import VectorStoreSettings
from ragchat.configs.worker import WorkerSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    worker: WorkerSettings = Field(default_factory=WorkerSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from ragchat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
