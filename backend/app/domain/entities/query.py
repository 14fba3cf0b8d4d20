"""Domain entities for RAG query results."""

from dataclasses import dataclass, field


@dataclass
class RagSource:
    """A retrieved fragment, traceable to the record it came from."""

    id: str
    source: str
    text: str


@dataclass
class RagAnswer:
    """Synthesized answer plus the fragments it was grounded on, in ranked order."""

    answer: str
    sources: list[RagSource] = field(default_factory=list)
