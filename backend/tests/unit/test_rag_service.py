"""Unit tests for the RagService — indexing, lazy builds and querying."""

import asyncio
from collections import Counter

import pytest

from app.application.interfaces import CrmRecordRepository, EmbeddingProvider
from app.application.services import (
    Chunker,
    DocumentBuilder,
    LocalAnswerSynthesizer,
    RagService,
    Retriever,
)
from app.application.services.document_builder import to_document
from app.domain.entities import (
    ChunkMetadata,
    Company,
    Contact,
    Deal,
    EmbeddedChunk,
    Note,
    Task,
    UserIndex,
)
from app.domain.exceptions import EmbeddingProviderError, RecordFetchError
from app.infrastructure.embeddings import LocalEmbeddingProvider
from app.infrastructure.vector_store import InMemoryVectorStore


# ── Fakes ──


class CountingCrmRepository(CrmRecordRepository):
    """Mutable in-memory record store that counts reads per collection."""

    def __init__(self, **collections: list):
        self.collections: dict[str, list] = {
            name: list(collections.get(name, []))
            for name in ("contacts", "companies", "deals", "notes", "tasks")
        }
        self.reads: Counter[str] = Counter()
        self.fail = False

    async def _read(self, name: str) -> list:
        self.reads[name] += 1
        await asyncio.sleep(0)
        if self.fail:
            raise ConnectionError("database unavailable")
        return list(self.collections[name])

    async def list_contacts(self) -> list[Contact]:
        return await self._read("contacts")

    async def list_companies(self) -> list[Company]:
        return await self._read("companies")

    async def list_deals(self) -> list[Deal]:
        return await self._read("deals")

    async def list_notes(self) -> list[Note]:
        return await self._read("notes")

    async def list_tasks(self) -> list[Task]:
        return await self._read("tasks")


class FailingEmbeddingProvider(EmbeddingProvider):
    @property
    def name(self) -> str:
        return "failing"

    @property
    def dimensions(self) -> int:
        return 3

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        raise EmbeddingProviderError("failing", 503, "unavailable")

    async def embed_one(self, text: str) -> list[float]:
        raise EmbeddingProviderError("failing", 503, "unavailable")


def _jane() -> Contact:
    return Contact(id="c1", first_name="Jane", last_name="Doe", email="jane@x.com")


def _make_service(
    repo: CrmRecordRepository,
    *,
    store: InMemoryVectorStore | None = None,
    embedding_provider: EmbeddingProvider | None = None,
) -> RagService:
    return RagService(
        document_builder=DocumentBuilder(repo),
        chunker=Chunker(),
        embedding_provider=embedding_provider or LocalEmbeddingProvider(),
        vector_store=store or InMemoryVectorStore(),
        retriever=Retriever(top_k=5),
        answer_synthesizer=LocalAnswerSynthesizer(),
    )


# ── Indexing ──


@pytest.mark.asyncio
async def test_index_stores_embedded_chunks_with_provider_pin():
    store = InMemoryVectorStore()
    repo = CountingCrmRepository(contacts=[_jane()], companies=[Company(id="co1", name="Acme")])
    service = _make_service(repo, store=store)

    count = await service.index("user-1")

    index = await store.get("user-1")
    assert count == 2
    assert index is not None
    assert [c.metadata.id for c in index.chunks] == ["contact:c1", "company:co1"]
    assert index.provider == "local-histogram-256"
    assert index.dimensions == 256
    assert all(len(c.embedding) == 256 for c in index.chunks)


@pytest.mark.asyncio
async def test_reindex_after_new_deal_grows_by_chunker_count():
    store = InMemoryVectorStore()
    repo = CountingCrmRepository(contacts=[_jane()])
    service = _make_service(repo, store=store)
    before = await service.index("user-1")

    deal = Deal(id="d1", name="Enterprise " + "expansion " * 120, value=90000, stage="proposal")
    repo.collections["deals"].append(deal)
    after = await service.index("user-1")

    expected = len(Chunker().chunk(to_document(deal)))
    assert expected > 1
    assert after - before == expected


@pytest.mark.asyncio
async def test_failed_fetch_leaves_previous_index_untouched():
    store = InMemoryVectorStore()
    repo = CountingCrmRepository(contacts=[_jane()])
    service = _make_service(repo, store=store)
    await service.index("user-1")
    previous = await store.get("user-1")

    repo.fail = True
    repo.collections["notes"].append(Note(id="n1", content="new"))
    with pytest.raises(RecordFetchError):
        await service.index("user-1")

    assert await store.get("user-1") is previous


@pytest.mark.asyncio
async def test_embedding_failure_propagates_and_stores_nothing():
    store = InMemoryVectorStore()
    service = _make_service(
        CountingCrmRepository(contacts=[_jane()]),
        store=store,
        embedding_provider=FailingEmbeddingProvider(),
    )
    with pytest.raises(EmbeddingProviderError):
        await service.index("user-1")
    assert await store.get("user-1") is None


# ── Querying ──


@pytest.mark.asyncio
async def test_query_returns_jane_as_source():
    service = _make_service(
        CountingCrmRepository(
            contacts=[_jane()],
            companies=[Company(id="co1", name="Acme", industry="Manufacturing")],
            tasks=[Task(id="t1", title="Quarterly review")],
        )
    )

    result = await service.query("user-1", "Who is Jane?")

    assert result.answer
    assert any("Jane Doe" in s.text for s in result.sources)
    jane = next(s for s in result.sources if "Jane Doe" in s.text)
    assert jane.id == "contact:c1"
    assert jane.source == "contacts"
    assert jane.text == "Contact Jane Doe email jane@x.com phone  company "


@pytest.mark.asyncio
async def test_query_on_empty_corpus_answers_without_sources():
    result = await _make_service(CountingCrmRepository()).query("user-1", "Anything there?")
    assert result.answer
    assert result.sources == []


@pytest.mark.asyncio
async def test_query_returns_at_most_five_sources():
    notes = [Note(id=str(i), content=f"Follow-up number {i}") for i in range(12)]
    result = await _make_service(CountingCrmRepository(notes=notes)).query("user-1", "follow-up")
    assert len(result.sources) == 5


@pytest.mark.asyncio
async def test_two_queries_fetch_records_once():
    repo = CountingCrmRepository(contacts=[_jane()])
    service = _make_service(repo)

    await service.query("user-1", "Who is Jane?")
    await service.query("user-1", "What is Jane's email?")

    assert repo.reads == Counter(contacts=1, companies=1, deals=1, notes=1, tasks=1)


@pytest.mark.asyncio
async def test_concurrent_first_queries_build_once():
    repo = CountingCrmRepository(contacts=[_jane()])
    service = _make_service(repo)

    await asyncio.gather(*(service.query("user-1", "Who is Jane?") for _ in range(5)))

    assert repo.reads["contacts"] == 1


@pytest.mark.asyncio
async def test_query_waiting_on_reindex_reuses_its_build():
    repo = CountingCrmRepository(contacts=[_jane()])
    service = _make_service(repo)

    count, answer = await asyncio.gather(
        service.index("user-1"), service.query("user-1", "Who is Jane?")
    )

    assert count == 1
    assert answer.sources[0].id == "contact:c1"
    assert repo.reads["contacts"] == 1


@pytest.mark.asyncio
async def test_user_locks_are_released_after_builds():
    repo = CountingCrmRepository(contacts=[_jane()])
    service = _make_service(repo)

    await asyncio.gather(
        service.index("alice"),
        *(service.query(user, "Who is Jane?") for user in ("alice", "bob", "bob")),
    )
    repo.fail = True
    with pytest.raises(RecordFetchError):
        await service.index("carol")

    assert service._locks == {}
    assert not service._lock_holders


@pytest.mark.asyncio
async def test_changes_only_visible_after_reindex():
    repo = CountingCrmRepository(contacts=[_jane()])
    service = _make_service(repo)
    await service.query("user-1", "Who is Jane?")

    repo.collections["notes"].append(Note(id="n1", content="Jane prefers phone calls"))
    stale = await service.query("user-1", "Jane prefers phone calls")
    assert all(s.id != "note:n1" for s in stale.sources)

    await service.index("user-1")
    fresh = await service.query("user-1", "Jane prefers phone calls")
    assert fresh.sources[0].id == "note:n1"


@pytest.mark.asyncio
async def test_users_have_isolated_indexes():
    store = InMemoryVectorStore()
    repo = CountingCrmRepository(contacts=[_jane()])
    service = _make_service(repo, store=store)

    await service.index("alice")

    assert await store.get("bob") is None
    assert (await store.get("alice")).chunks


@pytest.mark.asyncio
async def test_index_from_other_provider_is_rebuilt_before_query():
    store = InMemoryVectorStore()
    foreign = UserIndex(
        chunks=[
            EmbeddedChunk(
                text="old",
                metadata=ChunkMetadata(id="note:x", source="notes"),
                embedding=[1.0, 0.0, 0.0],
            )
        ],
        provider="openrouter:some-model",
        dimensions=3,
    )
    await store.replace("user-1", foreign)

    repo = CountingCrmRepository(contacts=[_jane()])
    result = await _make_service(repo, store=store).query("user-1", "Who is Jane?")

    assert repo.reads["contacts"] == 1
    assert [s.id for s in result.sources] == ["contact:c1"]
    rebuilt = await store.get("user-1")
    assert rebuilt is not None
    assert rebuilt.provider == "local-histogram-256"
