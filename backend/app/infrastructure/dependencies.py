"""Dependency wiring — composes infrastructure adapters into the RAG service.

Providers are chosen once, when the service is first built, and stay
fixed for the life of the process. Every index and every query therefore
use the same embedding space.
"""

import logging
from functools import lru_cache

from app.config import Settings, get_settings
from app.application.interfaces import (
    AnswerSynthesizer,
    CrmRecordRepository,
    EmbeddingProvider,
    VectorStore,
)
from app.application.services import (
    Chunker,
    DocumentBuilder,
    LLMAnswerSynthesizer,
    LocalAnswerSynthesizer,
    RagService,
    Retriever,
)
from app.infrastructure.embeddings import LocalEmbeddingProvider
from app.infrastructure.openrouter import OpenRouterClient, OpenRouterEmbeddingProvider
from app.infrastructure.vector_store import InMemoryVectorStore

logger = logging.getLogger(__name__)


def build_embedding_provider(settings: Settings) -> EmbeddingProvider:
    """OpenRouter embeddings when configured, the local histogram otherwise."""
    if settings.use_openrouter:
        api_key = settings.openrouter_api_key.strip()
        if not api_key:
            logger.warning(
                "RAG_BACKEND=openrouter but OPENROUTER_API_KEY is empty; using local embeddings."
            )
            return LocalEmbeddingProvider()
        return OpenRouterEmbeddingProvider(
            api_key=api_key,
            base_url=settings.openrouter_base_url,
            app_name=settings.openrouter_app_name,
            model=settings.embedding_model,
            model_dimensions=settings.embedding_dimensions,
            timeout=settings.provider_timeout_seconds,
        )
    return LocalEmbeddingProvider()


def build_answer_synthesizer(settings: Settings) -> AnswerSynthesizer:
    """LLM answers when configured, the local template otherwise."""
    api_key = settings.openrouter_api_key.strip()
    if settings.use_openrouter and api_key:
        provider = OpenRouterClient(
            api_key=api_key,
            base_url=settings.openrouter_base_url,
            app_name=settings.openrouter_app_name,
            timeout=settings.provider_timeout_seconds,
        )
        return LLMAnswerSynthesizer(provider, model=settings.answer_model)
    return LocalAnswerSynthesizer()


def build_crm_repository() -> CrmRecordRepository:
    """SQLAlchemy-backed record store bound to the configured database."""
    from app.infrastructure.database.repositories import SQLAlchemyCrmRecordRepository
    from app.infrastructure.database.session import async_session_factory

    return SQLAlchemyCrmRecordRepository(async_session_factory)


def build_rag_service(
    settings: Settings,
    repository: CrmRecordRepository,
    vector_store: VectorStore | None = None,
) -> RagService:
    """Assemble a RagService from settings and a record repository."""
    embedding_provider = build_embedding_provider(settings)
    answer_synthesizer = build_answer_synthesizer(settings)

    logger.info(
        "RAG wired — embeddings=%s (dims=%d), answers=%s",
        embedding_provider.name,
        embedding_provider.dimensions,
        answer_synthesizer.name,
    )

    return RagService(
        document_builder=DocumentBuilder(repository),
        chunker=Chunker(settings.rag_chunk_size, settings.rag_chunk_overlap),
        embedding_provider=embedding_provider,
        vector_store=vector_store or InMemoryVectorStore(),
        retriever=Retriever(settings.rag_top_k),
        answer_synthesizer=answer_synthesizer,
    )


@lru_cache
def get_rag_service() -> RagService:
    """Process-wide RagService — built on first use, then reused by every request."""
    return build_rag_service(get_settings(), build_crm_repository())
