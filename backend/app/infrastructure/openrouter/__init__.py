"""OpenRouter adapters — chat completions for answers, /embeddings for vectors."""

from .openrouter_client import OpenRouterClient
from .openrouter_embedding_provider import OpenRouterEmbeddingProvider

__all__ = ["OpenRouterClient", "OpenRouterEmbeddingProvider"]
