from .answer_synthesizer import LLMAnswerSynthesizer, LocalAnswerSynthesizer
from .chunker import Chunker
from .document_builder import DocumentBuilder
from .rag_service import RagService
from .retriever import Retriever, cosine_similarity

__all__ = [
    "LLMAnswerSynthesizer",
    "LocalAnswerSynthesizer",
    "Chunker",
    "DocumentBuilder",
    "RagService",
    "Retriever",
    "cosine_similarity",
]
