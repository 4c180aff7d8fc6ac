"""
Fixed-size sliding window chunking.

Dependencies: None
System role: Chunking stage of document ingestion
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextChunk:
    """One retrievable chunk of a document."""

    chunk_index: int
    start: int
    text: str


class SlidingWindowChunker:
    """Split text into overlapping windows of fixed size."""

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200) -> None:
        """
        Initialize chunker.

        Args:
            chunk_size: Window size in characters
            chunk_overlap: Characters shared by consecutive windows

        Raises:
            ValueError: If the window would not advance
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    def chunk(self, text: str) -> list[TextChunk]:
        """
        Split text into trimmed, non-empty chunks.

        The next window starts at end - overlap; the last window ends at the
        end of the text. Chunk indices count kept chunks only.

        Args:
            text: Extracted document text

        Returns:
            list[TextChunk]: Chunks in document order
        """
        chunks: list[TextChunk] = []
        length = len(text)
        start = 0
        while start < length:
            end = min(length, start + self._chunk_size)
            piece = text[start:end].strip()
            if piece:
                chunks.append(TextChunk(chunk_index=len(chunks), start=start, text=piece))
            if end == length:
                break
            start = end - self._chunk_overlap
        return chunks
