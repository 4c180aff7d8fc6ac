"""
Document processing: text extraction, chunking and the ingestion pipeline.
"""

from ragchat.core.document_processing.chunker import SlidingWindowChunker, TextChunk
from ragchat.core.document_processing.ingestion_pipeline import DocumentIngestionPipeline
from ragchat.core.document_processing.text_extractor import TextExtractor

__all__ = [
    "SlidingWindowChunker",
    "TextChunk",
    "TextExtractor",
    "DocumentIngestionPipeline",
]
