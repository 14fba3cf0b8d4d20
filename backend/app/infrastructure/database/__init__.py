from .base import Base
from .session import engine, async_session_factory
from .models import CompanyModel, ContactModel, DealModel, NoteModel, TaskModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "CompanyModel",
    "ContactModel",
    "DealModel",
    "NoteModel",
    "TaskModel",
]
