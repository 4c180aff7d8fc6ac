"""
Text generation model client.

Single-prompt completion against a LangChain chat model (Gemini by default).
Every failure, including timeouts and empty output, surfaces as
GenerationError so the caller can fall back.

Dependencies: langchain_core, langchain_google_genai
System role: Model boundary for response generation
"""

import asyncio
import logging
from typing import Protocol

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from ragchat.core.exceptions import GenerationError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Contract for the text generation collaborator."""

    async def generate(self, prompt: str) -> str:
        """Return completion text for the prompt, or raise GenerationError."""
        ...


class GeminiTextGenerator:
    """
    Completion client over a LangChain chat model.

    Usage:
        generator = GeminiTextGenerator(model_id="gemini-2.5-flash")
        text = await generator.generate(prompt)
    """

    def __init__(
        self,
        model_id: str = "gemini-2.5-flash",
        temperature: float = 0.0,
        timeout_seconds: float = 60.0,
        model: BaseChatModel | None = None,
    ) -> None:
        """
        Initialize generator.

        Args:
            model_id: Gemini model identifier
            temperature: Model temperature (0.0 for deterministic)
            timeout_seconds: Upper bound for one call
            model: Preconfigured chat model (overrides model_id/temperature)
        """
        self._model_id = model_id
        self._timeout = timeout_seconds
        self._model = model or ChatGoogleGenerativeAI(
            model=model_id,
            temperature=temperature,
        )
        logger.info(f"{__name__}:__init__ - Initialized generator with {model_id}")

    async def generate(self, prompt: str) -> str:
        """
        Generate completion text for a prompt.

        Args:
            prompt: Full prompt text

        Returns:
            str: Non-empty completion text

        Raises:
            GenerationError: On model failure, timeout or empty output
        """
        try:
            response = await asyncio.wait_for(
                self._model.ainvoke([HumanMessage(content=prompt)]),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationError(
                "Model call timed out",
                details={"model_id": self._model_id, "timeout_seconds": self._timeout},
            ) from e
        except Exception as e:
            raise GenerationError(
                f"Model call failed: {type(e).__name__}",
                details={"model_id": self._model_id, "error": str(e)},
            ) from e

        text = self._extract_text(response.content)
        if not text.strip():
            raise GenerationError(
                "Model returned empty output",
                details={"model_id": self._model_id},
            )
        return text

    @staticmethod
    def _extract_text(content) -> str:
        """Flatten string or content-block list into plain text."""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = []
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                elif isinstance(block, dict) and block.get("type") == "text":
                    parts.append(block.get("text", ""))
            return "".join(parts)
        return ""
