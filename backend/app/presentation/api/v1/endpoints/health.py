"""Health check endpoint — no auth, no database, always available."""

from fastapi import APIRouter, Depends

from app.application.services import RagService
from app.config import get_settings
from app.infrastructure.dependencies import get_rag_service

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(service: RagService = Depends(get_rag_service)) -> dict:
    """Report liveness plus the RAG backends the running service was wired with."""
    settings = get_settings()
    embedding_provider = service.embedding_provider.name
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "rag_mode": "openrouter" if embedding_provider.startswith("openrouter:") else "local",
        "embedding_provider": embedding_provider,
        "embedding_dimensions": service.embedding_provider.dimensions,
        "answer_synthesizer": service.answer_synthesizer.name,
    }
