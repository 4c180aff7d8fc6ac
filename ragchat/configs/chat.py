"""
Chat history settings.

Dependencies: pydantic_settings
System role: Conversation window configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChatSettings(BaseSettings):
    """Conversation history window configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    history_previous_messages: int = Field(
        default=3,
        description="Prior messages kept per sender when building the prompt",
    )
    context_char_budget: int = Field(
        default=3000,
        description="Total characters of retrieved snippets allowed in the prompt",
    )
