"""Process-local vector store — one index per user, lost on restart."""

import logging

from app.application.interfaces.vector_store import VectorStore
from app.domain.entities import UserIndex

logger = logging.getLogger(__name__)


class InMemoryVectorStore(VectorStore):
    """Implements the VectorStore port with a plain dict keyed by user id.

    ``replace`` is a single dict assignment, so readers see either the old
    index or the new one, never a mix.
    """

    def __init__(self) -> None:
        self._indexes: dict[str, UserIndex] = {}

    async def get(self, user_id: str) -> UserIndex | None:
        return self._indexes.get(user_id)

    async def replace(self, user_id: str, index: UserIndex) -> None:
        self._indexes[user_id] = index
        logger.debug(
            "Stored index for user %s: %d chunks (provider=%s, dims=%d)",
            user_id,
            len(index.chunks),
            index.provider,
            index.dimensions,
        )
