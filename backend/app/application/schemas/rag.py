"""Pydantic schemas for the RAG API requests and responses."""

from pydantic import BaseModel, Field


# ── Request Schemas ──────────────────────────────────────────────────


class RagQueryRequest(BaseModel):
    """Request body for a question about the user's CRM data.

    ``question`` is optional at the schema level so that a missing or
    empty value is answered with 400 by the endpoint rather than 422.
    """

    question: str | None = Field(None, description="Natural-language question", examples=["Who is Jane?"])


# ── Response Schemas ─────────────────────────────────────────────────


class RagSourceSchema(BaseModel):
    """A retrieved fragment and the record it came from."""

    id: str = Field(..., examples=["contact:5f0c"])
    source: str = Field(..., examples=["contacts"])
    text: str


class RagQueryResponse(BaseModel):
    """Synthesized answer with citation-style sources."""

    answer: str
    sources: list[RagSourceSchema] = []


class ReindexResponse(BaseModel):
    ok: bool = True
    chunks: int = 0
