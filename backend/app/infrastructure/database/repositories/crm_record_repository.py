"""Concrete read-only repository for CRM records backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces import CrmRecordRepository
from app.domain.entities import Company, Contact, Deal, Note, Task
from app.infrastructure.database.models import (
    CompanyModel,
    ContactModel,
    DealModel,
    NoteModel,
    TaskModel,
)


class SQLAlchemyCrmRecordRepository(CrmRecordRepository):
    """Implements the CrmRecordRepository port using SQLAlchemy async sessions.

    Each read opens its own short-lived session, so the five bulk reads can
    run concurrently (an AsyncSession cannot be shared between tasks).
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _fetch_all(self, model: type) -> list:
        async with self._session_factory() as session:
            stmt = select(model).order_by(model.created_at.desc())
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def list_contacts(self) -> list[Contact]:
        return [
            Contact(
                id=m.id,
                first_name=m.first_name,
                last_name=m.last_name,
                email=m.email,
                phone=m.phone,
                job_title=m.job_title,
                company_id=m.company_id,
                status=m.status,
            )
            for m in await self._fetch_all(ContactModel)
        ]

    async def list_companies(self) -> list[Company]:
        return [
            Company(
                id=m.id,
                name=m.name,
                domain=m.domain,
                industry=m.industry,
                size=m.size,
                address=m.address,
                phone=m.phone,
            )
            for m in await self._fetch_all(CompanyModel)
        ]

    async def list_deals(self) -> list[Deal]:
        return [
            Deal(
                id=m.id,
                name=m.name,
                value=m.value,
                stage=m.stage,
                probability=m.probability,
                expected_close_date=m.expected_close_date,
                contact_id=m.contact_id,
                company_id=m.company_id,
            )
            for m in await self._fetch_all(DealModel)
        ]

    async def list_notes(self) -> list[Note]:
        return [
            Note(
                id=m.id,
                content=m.content,
                contact_id=m.contact_id,
                company_id=m.company_id,
                deal_id=m.deal_id,
            )
            for m in await self._fetch_all(NoteModel)
        ]

    async def list_tasks(self) -> list[Task]:
        return [
            Task(
                id=m.id,
                title=m.title,
                description=m.description,
                due_date=m.due_date,
                completed=m.completed,
                priority=m.priority,
                contact_id=m.contact_id,
                company_id=m.company_id,
                deal_id=m.deal_id,
            )
            for m in await self._fetch_all(TaskModel)
        ]
