"""RAG endpoints — rebuild the caller's index and ask questions against it."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.application.schemas.rag import (
    RagQueryRequest,
    RagQueryResponse,
    RagSourceSchema,
    ReindexResponse,
)
from app.application.services import RagService
from app.domain.exceptions import RecordFetchError, UpstreamProviderError
from app.infrastructure.auth import get_current_user_id
from app.infrastructure.dependencies import get_rag_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai/rag", tags=["RAG"])


def _raise_for_failure(exc: Exception) -> None:
    """Map domain failures to HTTP errors."""
    if isinstance(exc, RecordFetchError):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    if isinstance(exc, UpstreamProviderError):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc
    raise exc


@router.post("/reindex", response_model=ReindexResponse)
async def reindex(
    user_id: str = Depends(get_current_user_id),
    service: RagService = Depends(get_rag_service),
) -> ReindexResponse:
    """Rebuild the caller's index from the current CRM records."""
    try:
        chunks = await service.index(user_id)
    except (RecordFetchError, UpstreamProviderError) as e:
        logger.error("Reindex failed for user %s: %s", user_id, e)
        _raise_for_failure(e)
    return ReindexResponse(ok=True, chunks=chunks)


@router.post("/query", response_model=RagQueryResponse)
async def query(
    body: RagQueryRequest | None = None,
    user_id: str = Depends(get_current_user_id),
    service: RagService = Depends(get_rag_service),
) -> RagQueryResponse:
    """Answer a natural-language question from the caller's CRM data."""
    question = body.question.strip() if body and body.question else ""
    if not question:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing question")

    try:
        result = await service.query(user_id, question)
    except (RecordFetchError, UpstreamProviderError) as e:
        logger.error("Query failed for user %s: %s", user_id, e)
        _raise_for_failure(e)

    return RagQueryResponse(
        answer=result.answer,
        sources=[RagSourceSchema(id=s.id, source=s.source, text=s.text) for s in result.sources],
    )
