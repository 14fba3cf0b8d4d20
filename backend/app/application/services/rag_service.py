"""RAG service — indexes a user's CRM data and answers questions against it.

Coordinates:
1. Building documents from the CRM record store
2. Chunking them into bounded windows
3. Embedding all chunks in one batched call
4. Replacing the user's index in the vector store
5. Retrieving and synthesizing answers for questions
"""

import asyncio
import logging
from collections import Counter
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.application.interfaces.answer_synthesizer import AnswerSynthesizer
from app.application.interfaces.embedding_provider import EmbeddingProvider
from app.application.interfaces.vector_store import VectorStore
from app.application.services.chunker import Chunker
from app.application.services.document_builder import DocumentBuilder
from app.application.services.retriever import Retriever
from app.domain.entities import EmbeddedChunk, RagAnswer, RagSource, UserIndex
from app.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)


class RagService:
    """Application service for retrieval-augmented question answering.

    The embedding provider and answer synthesizer are fixed for the
    lifetime of the service. Build-and-replace for a user runs under that
    user's lock, so a query never races a rebuild of the same index.
    """

    def __init__(
        self,
        document_builder: DocumentBuilder,
        chunker: Chunker,
        embedding_provider: EmbeddingProvider,
        vector_store: VectorStore,
        retriever: Retriever,
        answer_synthesizer: AnswerSynthesizer,
    ):
        self._document_builder = document_builder
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._retriever = retriever
        self._answer_synthesizer = answer_synthesizer
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_holders: Counter[str] = Counter()
        self._log = PipelineLogger("RagService")

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        return self._embedding_provider

    @property
    def answer_synthesizer(self) -> AnswerSynthesizer:
        return self._answer_synthesizer

    @asynccontextmanager
    async def _user_lock(self, user_id: str) -> AsyncIterator[None]:
        """Hold the user's build lock; the lock is dropped once no task holds or awaits it."""
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._lock_holders[user_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_holders[user_id] -= 1
            if not self._lock_holders[user_id]:
                del self._lock_holders[user_id]
                del self._locks[user_id]

    async def index(self, user_id: str) -> int:
        """Rebuild the user's index from scratch.

        Returns:
            Number of chunks stored.
        """
        async with self._user_lock(user_id):
            user_index = await self._rebuild(user_id)
        return len(user_index.chunks)

    async def query(self, user_id: str, question: str) -> RagAnswer:
        """Answer ``question`` from the user's index, building it first if needed."""
        user_index = await self._vector_store.get(user_id)
        if self._needs_build(user_index):
            async with self._user_lock(user_id):
                # Another task may have finished a build while we waited.
                user_index = await self._vector_store.get(user_id)
                if self._needs_build(user_index):
                    user_index = await self._rebuild(user_id)

        with self._log.timed_step(PipelineStage.RETRIEVE, "Retrieving context", user=user_id):
            query_vector = await self._embedding_provider.embed_one(question)
            retrieved = self._retriever.retrieve(user_index.chunks, query_vector)

        with self._log.timed_step(
            PipelineStage.SYNTHESIZE,
            "Synthesizing answer",
            synthesizer=self._answer_synthesizer.name,
            chunks=len(retrieved),
        ):
            answer = await self._answer_synthesizer.synthesize(retrieved, question)

        return RagAnswer(
            answer=answer,
            sources=[
                RagSource(id=c.metadata.id, source=c.metadata.source, text=c.text)
                for c in retrieved
            ],
        )

    def _needs_build(self, user_index: UserIndex | None) -> bool:
        if user_index is None or user_index.is_empty:
            return True
        if user_index.provider != self._embedding_provider.name:
            logger.warning(
                "Index was built with '%s' but the active provider is '%s' — rebuilding",
                user_index.provider,
                self._embedding_provider.name,
            )
            return True
        return False

    async def _rebuild(self, user_id: str) -> UserIndex:
        """Build, chunk, embed and store. Callers must hold the user's lock."""
        self._log.separator(f"index {user_id}")

        with self._log.timed_step(PipelineStage.FETCH, "Building documents", user=user_id):
            documents = await self._document_builder.build(user_id)

        with self._log.timed_step(PipelineStage.CHUNK, "Chunking documents", documents=len(documents)):
            chunks = self._chunker.chunk_many(documents)

        with self._log.timed_step(
            PipelineStage.EMBED,
            "Embedding chunks",
            chunks=len(chunks),
            provider=self._embedding_provider.name,
        ):
            vectors = await self._embedding_provider.embed_many([c.text for c in chunks])

        embedded = [
            EmbeddedChunk(text=c.text, metadata=c.metadata, embedding=v)
            for c, v in zip(chunks, vectors, strict=True)
        ]
        user_index = UserIndex(
            chunks=embedded,
            provider=self._embedding_provider.name,
            dimensions=self._embedding_provider.dimensions,
        )

        with self._log.timed_step(PipelineStage.STORE, "Replacing index", user=user_id):
            await self._vector_store.replace(user_id, user_index)

        self._log.stats(documents=len(documents), chunks=len(embedded))
        return user_index
