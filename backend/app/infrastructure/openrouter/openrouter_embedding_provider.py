"""OpenRouter-based embedding provider — calls the /embeddings endpoint.

Uses the same httpx client pattern as OpenRouterClient.
Default model: openai/text-embedding-3-small (1536 dimensions).
"""

import logging
from typing import Any

import httpx

from app.application.interfaces.embedding_provider import EmbeddingProvider
from app.domain.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)

_MAX_BATCH_SIZE = 100  # Max texts per embedding API call
_DEFAULT_TIMEOUT_SECONDS = 60.0


class OpenRouterEmbeddingProvider(EmbeddingProvider):
    """Infrastructure adapter — generates embeddings via OpenRouter /embeddings API.

    Corpus and query texts go through the same model, so every vector this
    instance produces lives in one space.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        app_name: str = "CRM Insights",
        model: str = "openai/text-embedding-3-small",
        model_dimensions: int = 1536,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._app_name = app_name
        self._model = model
        self._dimensions = model_dimensions
        self._http_client = http_client
        self._timeout = timeout

    @property
    def name(self) -> str:
        return f"openrouter:{self._model}"

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Title": self._app_name,
        }

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a batch of texts, split into API-sized requests."""
        if not texts:
            return []

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            result: list[list[float]] = []
            for batch_start in range(0, len(texts), _MAX_BATCH_SIZE):
                batch = texts[batch_start : batch_start + _MAX_BATCH_SIZE]
                result.extend(await self._embed_batch(client, batch))
        finally:
            if should_close:
                await client.aclose()

        logger.info(
            "Generated %d embeddings (model=%s, dims=%d)",
            len(result),
            self._model,
            len(result[0]) if result else 0,
        )
        return result

    async def embed_one(self, text: str) -> list[float]:
        results = await self.embed_many([text])
        return results[0]

    async def _embed_batch(self, client: httpx.AsyncClient, batch: list[str]) -> list[list[float]]:
        url = f"{self._base_url}/embeddings"
        payload: dict[str, Any] = {
            "model": self._model,
            "input": batch,
            "dimensions": self._dimensions,
        }

        try:
            response = await client.post(url, headers=self._get_headers(), json=payload)
        except httpx.TimeoutException as e:
            raise EmbeddingProviderError("openrouter", 504, f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise EmbeddingProviderError("openrouter", 502, str(e)) from e

        if response.status_code != 200:
            error_text = response.text[:500]
            logger.error("Embedding API error %d: %s", response.status_code, error_text)
            raise EmbeddingProviderError("openrouter", response.status_code, error_text)

        embeddings_data = response.json().get("data", [])
        if len(embeddings_data) != len(batch):
            raise EmbeddingProviderError(
                "openrouter",
                500,
                f"Expected {len(batch)} embeddings, got {len(embeddings_data)}",
            )

        # Sort by index to ensure correct ordering
        embeddings_data.sort(key=lambda x: x.get("index", 0))
        vectors = [item["embedding"] for item in embeddings_data]

        # Models may ignore the requested size.
        for vector in vectors:
            if len(vector) != self._dimensions:
                raise EmbeddingProviderError(
                    "openrouter",
                    500,
                    f"Expected {self._dimensions}-dimensional embeddings from {self._model}, "
                    f"got {len(vector)}",
                )
        return vectors
