"""Answer synthesizers — LLM-backed and local template fallback."""

import logging
import time

from app.application.interfaces.answer_synthesizer import AnswerSynthesizer
from app.application.interfaces.chat_provider import ChatProvider
from app.domain.entities import ChatMessage, EmbeddedChunk
from app.domain.exceptions import ChatProviderError

logger = logging.getLogger(__name__)

_CONTEXT_SEPARATOR = "\n\n"
_LOCAL_SNIPPET_CHARS = 600

_PROMPT_TEMPLATE = (
    "Use the context to answer the user's question.\n"
    "Context:\n{context}\n"
    "Question:\n{question}\n"
    "Answer concisely."
)


def build_context(chunks: list[EmbeddedChunk]) -> str:
    """Join chunk texts in ranked order, separated by a blank line."""
    return _CONTEXT_SEPARATOR.join(c.text for c in chunks)


class LLMAnswerSynthesizer(AnswerSynthesizer):
    """Sends context + question to a chat provider and returns its reply verbatim.

    Provider failures propagate to the caller; there is no fallback to the
    local template in the middle of a request.
    """

    def __init__(
        self,
        chat_provider: ChatProvider,
        model: str = "openai/gpt-4o-mini",
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ):
        self._provider = chat_provider
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def name(self) -> str:
        return f"{self._provider.provider_name}:{self._model}"

    async def synthesize(self, chunks: list[EmbeddedChunk], question: str) -> str:
        prompt = _PROMPT_TEMPLATE.format(context=build_context(chunks), question=question)
        start = time.monotonic()
        try:
            result = await self._provider.complete(
                messages=[ChatMessage(role="user", content=prompt)],
                model=self._model,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except ChatProviderError as e:
            logger.error("Answer synthesis failed (model=%s): %s", self._model, e)
            raise

        logger.info(
            "Synthesized answer (model=%s, tokens=%d, %dms)",
            result.model or self._model,
            result.usage.total_tokens,
            int((time.monotonic() - start) * 1000),
        )
        return result.content


class LocalAnswerSynthesizer(AnswerSynthesizer):
    """Deterministic, offline answer: a context snippet followed by the question."""

    def __init__(self, snippet_chars: int = _LOCAL_SNIPPET_CHARS):
        self._snippet_chars = snippet_chars

    @property
    def name(self) -> str:
        return "local"

    async def synthesize(self, chunks: list[EmbeddedChunk], question: str) -> str:
        snippet = build_context(chunks)[: self._snippet_chars]
        return f"Based on the available context:\n{snippet}\n\nAnswer: {question}"
