"""Unit tests for the InMemoryVectorStore."""

from datetime import datetime, timezone

import pytest

from app.domain.entities import ChunkMetadata, EmbeddedChunk, UserIndex
from app.infrastructure.vector_store import InMemoryVectorStore


def _index(*texts: str, provider: str = "local-histogram-256") -> UserIndex:
    chunks = [
        EmbeddedChunk(
            text=text,
            metadata=ChunkMetadata(id=f"note:{i}", source="note"),
            embedding=[1.0, 0.0],
        )
        for i, text in enumerate(texts)
    ]
    return UserIndex(
        chunks=chunks,
        provider=provider,
        dimensions=2,
        built_at=datetime.now(timezone.utc),
    )


@pytest.mark.asyncio
async def test_get_unknown_user_returns_none():
    store = InMemoryVectorStore()
    assert await store.get("nobody") is None


@pytest.mark.asyncio
async def test_replace_swaps_whole_index():
    store = InMemoryVectorStore()
    await store.replace("alice", _index("a", "b"))
    await store.replace("alice", _index("c"))

    index = await store.get("alice")
    assert [c.text for c in index.chunks] == ["c"]


@pytest.mark.asyncio
async def test_users_are_isolated():
    store = InMemoryVectorStore()
    await store.replace("alice", _index("alice data"))
    await store.replace("bob", _index("bob data"))

    assert [c.text for c in (await store.get("alice")).chunks] == ["alice data"]
    assert [c.text for c in (await store.get("bob")).chunks] == ["bob data"]
    assert await store.get("carol") is None


@pytest.mark.asyncio
async def test_empty_index_is_stored_and_reported_empty():
    store = InMemoryVectorStore()
    await store.replace("alice", _index())

    index = await store.get("alice")
    assert index is not None
    assert index.is_empty
