"""Fixed-window text chunker with overlap."""

import logging
from collections.abc import Iterable

from app.domain.entities import Chunk, ChunkMetadata, Document
from app.domain.exceptions import ChunkingConfigurationError

logger = logging.getLogger(__name__)

# ── Chunking constants ──────────────────────────────────────────────
DEFAULT_CHUNK_SIZE = 800  # characters per window
DEFAULT_CHUNK_OVERLAP = 100  # characters shared by consecutive windows


class Chunker:
    """Splits document text into overlapping character windows.

    Windows start at offset 0 and advance by ``chunk_size - chunk_overlap``.
    The window that reaches the end of the text is the last one, so text
    shorter than ``chunk_size`` yields exactly one chunk and empty text
    yields none.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ):
        if chunk_size <= 0 or chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ChunkingConfigurationError(chunk_size, chunk_overlap)
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self._chunk_overlap

    def split_text(self, text: str) -> list[str]:
        """Return the raw text windows for ``text``."""
        windows: list[str] = []
        step = self._chunk_size - self._chunk_overlap
        start = 0
        while start < len(text):
            end = start + self._chunk_size
            windows.append(text[start:end])
            if end >= len(text):
                break
            start += step
        return windows

    def chunk(self, document: Document) -> list[Chunk]:
        metadata = ChunkMetadata(id=document.id, source=document.source)
        return [Chunk(text=w, metadata=metadata) for w in self.split_text(document.text)]

    def chunk_many(self, documents: Iterable[Document]) -> list[Chunk]:
        """Chunk every document, preserving document order."""
        chunks: list[Chunk] = []
        for document in documents:
            chunks.extend(self.chunk(document))
        return chunks
