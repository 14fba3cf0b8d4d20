"""Domain entities for the RAG index — documents, chunks and embedded chunks."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Document:
    """Flat text projection of one CRM record.

    ``id`` is the composite key ``"<entity_type>:<record_id>"`` and
    ``source`` names the collection the record came from ("contacts", ...).
    """

    id: str
    text: str
    source: str


@dataclass(frozen=True)
class ChunkMetadata:
    """Back-reference from a chunk to the document it was cut from."""

    id: str
    source: str


@dataclass(frozen=True)
class Chunk:
    """A bounded window of a document's text."""

    text: str
    metadata: ChunkMetadata


@dataclass(frozen=True)
class EmbeddedChunk:
    """A chunk together with its embedding vector."""

    text: str
    metadata: ChunkMetadata
    embedding: list[float] = field(default_factory=list)


@dataclass
class UserIndex:
    """Everything stored for one user: the embedded chunks plus the vector space they live in.

    ``provider`` and ``dimensions`` identify the embedding provider that
    produced every vector in ``chunks``; query vectors must come from the
    same provider for similarity scores to mean anything.
    """

    chunks: list[EmbeddedChunk]
    provider: str
    dimensions: int
    built_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not self.chunks
