"""Abstract interface (port) for the per-user vector store."""

from abc import ABC, abstractmethod

from app.domain.entities import UserIndex


class VectorStore(ABC):
    """Port for storing one embedded index per user.

    There is deliberately no incremental update: every rebuild replaces the
    user's whole index in a single call.
    """

    @abstractmethod
    async def get(self, user_id: str) -> UserIndex | None:
        """Return the user's index, or None if none has been built yet."""
        ...

    @abstractmethod
    async def replace(self, user_id: str, index: UserIndex) -> None:
        """Overwrite the user's index."""
        ...
