from .answer_synthesizer import AnswerSynthesizer
from .chat_provider import ChatProvider
from .crm_record_repository import CrmRecordRepository
from .embedding_provider import EmbeddingProvider
from .vector_store import VectorStore

__all__ = [
    "AnswerSynthesizer",
    "ChatProvider",
    "CrmRecordRepository",
    "EmbeddingProvider",
    "VectorStore",
]
