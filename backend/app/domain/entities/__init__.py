from .chat_message import ChatMessage, TokenUsage, ChatCompletionResult
from .crm_record import Company, Contact, Deal, Note, Summarizable, Task
from .document import Chunk, ChunkMetadata, Document, EmbeddedChunk, UserIndex
from .query import RagAnswer, RagSource

__all__ = [
    "ChatMessage",
    "TokenUsage",
    "ChatCompletionResult",
    "Company",
    "Contact",
    "Deal",
    "Note",
    "Summarizable",
    "Task",
    "Chunk",
    "ChunkMetadata",
    "Document",
    "EmbeddedChunk",
    "UserIndex",
    "RagAnswer",
    "RagSource",
]
