"""
Retrieval-augmented generation pipeline for session chat.

HistorySelector -> ContextRetriever -> PromptAssembler -> ResponseGenerator
"""

from ragchat.core.rag.context_retriever import ContextRetriever
from ragchat.core.rag.history_selector import select_history
from ragchat.core.rag.message_indexer import MessageIndexer
from ragchat.core.rag.prompt_assembler import build_prompt
from ragchat.core.rag.response_generator import FALLBACK_RESPONSE, ResponseGenerator

__all__ = [
    "ContextRetriever",
    "select_history",
    "MessageIndexer",
    "build_prompt",
    "ResponseGenerator",
    "FALLBACK_RESPONSE",
]
