"""Local (offline) embedding providers."""

from .local_embedding_provider import LocalEmbeddingProvider

__all__ = ["LocalEmbeddingProvider"]
