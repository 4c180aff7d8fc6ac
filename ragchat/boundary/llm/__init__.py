"""Text generation boundary."""

from ragchat.boundary.llm.gemini_generator import GeminiTextGenerator, TextGenerator

__all__ = ["GeminiTextGenerator", "TextGenerator"]
