"""
Session-scoped RAG chat service.

Multi-turn conversations augmented with content retrieved from documents
uploaded to the same session.
"""

__version__ = "0.1.0"
