"""Abstract repository interface (port) for bulk reads of CRM records."""

from abc import ABC, abstractmethod

from app.domain.entities import Company, Contact, Deal, Note, Task


class CrmRecordRepository(ABC):
    """Port for the CRM record store — one bulk read per entity type."""

    @abstractmethod
    async def list_contacts(self) -> list[Contact]:
        ...

    @abstractmethod
    async def list_companies(self) -> list[Company]:
        ...

    @abstractmethod
    async def list_deals(self) -> list[Deal]:
        ...

    @abstractmethod
    async def list_notes(self) -> list[Note]:
        ...

    @abstractmethod
    async def list_tasks(self) -> list[Task]:
        ...
