"""
Integration tests for GeminiTextGenerator using LangChain fake chat models.

System role: Verification of model error normalization
"""

import asyncio

import pytest
from langchain_core.language_models import FakeListChatModel

from ragchat.boundary.llm.gemini_generator import GeminiTextGenerator
from ragchat.core.exceptions import GenerationError


class SlowChatModel(FakeListChatModel):
    """Fake chat model that takes longer than the generator allows."""

    async def ainvoke(self, *args, **kwargs):
        await asyncio.sleep(1)
        return await super().ainvoke(*args, **kwargs)


class TestGeminiTextGenerator:
    """Test suite for GeminiTextGenerator.generate."""

    @pytest.mark.asyncio
    async def test_returns_model_text(self) -> None:
        """Test the completion text is returned as-is."""
        # Arrange
        generator = GeminiTextGenerator(model=FakeListChatModel(responses=["Paris"]))

        # Act & Assert
        assert await generator.generate("Capital of France?") == "Paris"

    @pytest.mark.asyncio
    async def test_empty_output_raises(self) -> None:
        """Test blank completions are treated as failures."""
        # Arrange
        generator = GeminiTextGenerator(model=FakeListChatModel(responses=["   "]))

        # Act & Assert
        with pytest.raises(GenerationError, match="empty output"):
            await generator.generate("anything")

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        """Test slow models surface as GenerationError."""
        # Arrange
        generator = GeminiTextGenerator(
            model=SlowChatModel(responses=["late"]),
            timeout_seconds=0.05,
        )

        # Act & Assert
        with pytest.raises(GenerationError, match="timed out"):
            await generator.generate("anything")

    @pytest.mark.asyncio
    async def test_model_error_is_wrapped(self) -> None:
        """Test provider exceptions are wrapped in GenerationError."""

        class BrokenModel(FakeListChatModel):
            async def ainvoke(self, *args, **kwargs):
                raise ConnectionError("network down")

        generator = GeminiTextGenerator(model=BrokenModel(responses=["x"]))

        with pytest.raises(GenerationError, match="ConnectionError"):
            await generator.generate("anything")

    def test_content_blocks_are_joined(self) -> None:
        """Test list-style message content is flattened to text."""
        content = [{"type": "text", "text": "Hello "}, {"type": "image"}, "world"]
        assert GeminiTextGenerator._extract_text(content) == "Hello world"
