from .crm_models import CompanyModel, ContactModel, DealModel, NoteModel, TaskModel

__all__ = [
    "CompanyModel",
    "ContactModel",
    "DealModel",
    "NoteModel",
    "TaskModel",
]
