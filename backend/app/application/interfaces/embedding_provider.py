"""Abstract interface (port) for embedding generation."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Port for generating text embeddings — implemented in the infrastructure layer.

    The same provider instance must embed both the corpus and the queries
    run against it; vectors from different providers are not comparable.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier of the vector space (provider + model)."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Return the dimensionality of the embedding vectors produced by this provider."""
        ...

    @abstractmethod
    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for a batch of texts.

        Args:
            texts: List of text strings to embed.

        Returns:
            List of embedding vectors, one per input text, in input order.
        """
        ...

    @abstractmethod
    async def embed_one(self, text: str) -> list[float]:
        """Generate a single embedding for a search query."""
        ...
