"""
Background worker pool settings.

Dependencies: pydantic_settings
System role: Indexing worker pool configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkerSettings(BaseSettings):
    """Settings for the in-process indexing worker pool."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WORKER_",
        case_sensitive=False,
        extra="ignore",
    )

    pool_size: int = Field(default=2, description="Number of concurrent indexing workers")
    max_queue_size: int = Field(
        default=0,
        description="Maximum queued jobs (0 = unbounded)",
    )
