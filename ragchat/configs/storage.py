"""
Uploaded document storage settings.

Dependencies: pydantic_settings
System role: Local file storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for the on-disk document store."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    root: str = Field(
        default="storage/session-docs",
        description="Root directory; files land under <root>/<session_id>/",
    )
