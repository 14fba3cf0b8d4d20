from .crm_record_repository import SQLAlchemyCrmRecordRepository

__all__ = [
    "SQLAlchemyCrmRecordRepository",
]
