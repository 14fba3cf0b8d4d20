"""Integration tests for the SQLAlchemy CRM record repository (SQLite in memory)."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.application.services.document_builder import to_document
from app.infrastructure.database import Base
from app.infrastructure.database.models import (
    CompanyModel,
    ContactModel,
    DealModel,
    NoteModel,
    TaskModel,
)
from app.infrastructure.database.repositories import SQLAlchemyCrmRecordRepository


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        session.add_all(
            [
                CompanyModel(
                    id="co1",
                    name="Acme",
                    domain="acme.com",
                    industry="Manufacturing",
                    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
                ),
                ContactModel(
                    id="c1",
                    first_name="Jane",
                    last_name="Doe",
                    email="jane@acme.com",
                    company_id="co1",
                    created_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
                ),
                ContactModel(
                    id="c2",
                    first_name="John",
                    last_name="Smith",
                    email="john@acme.com",
                    created_at=datetime(2024, 1, 3, tzinfo=timezone.utc),
                ),
                DealModel(
                    id="d1",
                    name="Acme renewal",
                    value=Decimal("12000.00"),
                    stage="negotiation",
                    company_id="co1",
                    contact_id="c1",
                ),
                NoteModel(id="n1", content="Prefers email", contact_id="c1"),
                TaskModel(id="t1", title="Send proposal", deal_id="d1"),
            ]
        )
        await session.commit()

    yield factory

    await engine.dispose()


@pytest.mark.asyncio
async def test_contacts_are_mapped_newest_first(session_factory):
    repository = SQLAlchemyCrmRecordRepository(session_factory)

    contacts = await repository.list_contacts()

    assert [c.id for c in contacts] == ["c2", "c1"]
    jane = contacts[1]
    assert (jane.first_name, jane.last_name, jane.email) == ("Jane", "Doe", "jane@acme.com")
    assert jane.company_id == "co1"
    assert jane.status == "lead"


@pytest.mark.asyncio
async def test_every_collection_is_readable(session_factory):
    repository = SQLAlchemyCrmRecordRepository(session_factory)

    assert [c.name for c in await repository.list_companies()] == ["Acme"]
    assert [d.stage for d in await repository.list_deals()] == ["negotiation"]
    assert [n.content for n in await repository.list_notes()] == ["Prefers email"]
    tasks = await repository.list_tasks()
    assert [t.title for t in tasks] == ["Send proposal"]
    assert tasks[0].completed == "false"


@pytest.mark.asyncio
async def test_mapped_records_summarize_into_documents(session_factory):
    repository = SQLAlchemyCrmRecordRepository(session_factory)

    deal = (await repository.list_deals())[0]
    document = to_document(deal)

    assert document.id == "deal:d1"
    assert document.source == "deals"
    assert document.text.startswith("Deal Acme renewal value 12000")
    assert "company co1 contact c1" in document.text
