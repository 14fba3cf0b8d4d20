"""Abstract interface (port) for answer synthesis."""

from abc import ABC, abstractmethod

from app.domain.entities import EmbeddedChunk


class AnswerSynthesizer(ABC):
    """Port — turns retrieved chunks and a question into an answer."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def synthesize(self, chunks: list[EmbeddedChunk], question: str) -> str:
        """Produce an answer grounded on ``chunks`` (given in ranked order)."""
        ...
