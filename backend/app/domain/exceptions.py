"""Domain-specific exceptions — framework-independent."""


class UpstreamProviderError(Exception):
    """Raised when an external AI provider (embeddings or completions) fails.

    Provider-agnostic — works for OpenRouter, OpenAI, etc.
    """

    def __init__(self, provider: str, status_code: int, message: str):
        self.provider = provider
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{provider}] {status_code}: {message}")


class ChatProviderError(UpstreamProviderError):
    """Raised when a chat provider returns an error."""


class EmbeddingProviderError(UpstreamProviderError):
    """Raised when an embedding provider returns an error."""


class RecordFetchError(Exception):
    """Raised when one of the CRM record collections cannot be read.

    The original exception is chained via ``__cause__``.
    """

    def __init__(self, collection: str, reason: str):
        self.collection = collection
        self.reason = reason
        super().__init__(f"Failed to fetch '{collection}': {reason}")


class ChunkingConfigurationError(ValueError):
    """Raised when chunk window parameters cannot make progress."""

    def __init__(self, chunk_size: int, chunk_overlap: int):
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        super().__init__(
            f"Invalid chunking parameters: size={chunk_size}, overlap={chunk_overlap} "
            "(require size > 0 and 0 <= overlap < size)"
        )
