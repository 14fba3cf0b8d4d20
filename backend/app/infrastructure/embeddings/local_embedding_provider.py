"""Local embedding provider — deterministic character histograms, no network."""

from app.application.interfaces.embedding_provider import EmbeddingProvider

LOCAL_DIMENSIONS = 256


def histogram_embedding(text: str, dimensions: int = LOCAL_DIMENSIONS) -> list[float]:
    """Count code points modulo ``dimensions``, normalized by text length."""
    vector = [0.0] * dimensions
    for ch in text:
        vector[ord(ch) % dimensions] += 1
    length = max(len(text), 1)
    return [x / length for x in vector]


class LocalEmbeddingProvider(EmbeddingProvider):
    """Fallback used when no external embedding service is configured.

    Captures character distribution only, not meaning, but it is always
    available and identical input always yields identical vectors.
    """

    @property
    def name(self) -> str:
        return f"local-histogram-{LOCAL_DIMENSIONS}"

    @property
    def dimensions(self) -> int:
        return LOCAL_DIMENSIONS

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        return [histogram_embedding(t) for t in texts]

    async def embed_one(self, text: str) -> list[float]:
        return histogram_embedding(text)
