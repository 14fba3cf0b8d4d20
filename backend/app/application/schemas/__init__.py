from .rag import RagQueryRequest, RagQueryResponse, RagSourceSchema, ReindexResponse

__all__ = [
    "RagQueryRequest",
    "RagQueryResponse",
    "RagSourceSchema",
    "ReindexResponse",
]
