"""
Text generation model settings.

Dependencies: pydantic_settings
System role: Chat model configuration for response generation
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Google Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(default="gemini-2.5-flash", description="Gemini model identifier")
    temperature: float = Field(default=0.0, description="Sampling temperature")
    timeout_seconds: float = Field(
        default=60.0,
        description="Upper bound for one generation call",
    )
