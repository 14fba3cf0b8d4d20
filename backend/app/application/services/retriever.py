"""Cosine-similarity retrieval over an in-memory list of embedded chunks."""

import math
from collections.abc import Sequence

from app.domain.entities import EmbeddedChunk

DEFAULT_TOP_K = 5


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Normalized dot product of two vectors.

    A zero denominator is replaced by 1, so a zero vector scores 0 against
    everything instead of raising.
    """
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    denominator = math.sqrt(norm_a) * math.sqrt(norm_b)
    return dot / (denominator or 1.0)


class Retriever:
    """Ranks stored chunks against a query vector and returns the top K."""

    def __init__(self, top_k: int = DEFAULT_TOP_K):
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")
        self._top_k = top_k

    @property
    def top_k(self) -> int:
        return self._top_k

    def rank(
        self, entries: Sequence[EmbeddedChunk], query_vector: Sequence[float]
    ) -> list[tuple[EmbeddedChunk, float]]:
        """Score every entry; highest first, ties in insertion order."""
        scored = [(entry, cosine_similarity(entry.embedding, query_vector)) for entry in entries]
        # sorted() is stable, reverse=True included
        return sorted(scored, key=lambda pair: pair[1], reverse=True)

    def retrieve(
        self,
        entries: Sequence[EmbeddedChunk],
        query_vector: Sequence[float],
        k: int | None = None,
    ) -> list[EmbeddedChunk]:
        limit = self._top_k if k is None else k
        return [entry for entry, _ in self.rank(entries, query_vector)[:limit]]
