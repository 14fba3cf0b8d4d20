"""CRM record entities — read-only views of the records the RAG index is built from.

Each record type knows how to project itself into a single-line summary
(``summarize``), which is what gets embedded. Adding a new entity type
means adding one more class with ``entity_type``, ``collection`` and
``summarize``.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, ClassVar, Protocol, runtime_checkable


def _text(value: Any) -> str:
    """Render an optional field value; missing values become an empty string."""
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


@runtime_checkable
class Summarizable(Protocol):
    """Capability shared by every record type that can be indexed."""

    entity_type: ClassVar[str]  # singular, used in document ids ("contact")
    collection: ClassVar[str]  # plural, used as document source ("contacts")
    id: str

    def summarize(self) -> str: ...


@dataclass(frozen=True)
class Company:
    id: str
    name: str
    domain: str | None = None
    industry: str | None = None
    size: str | None = None
    address: str | None = None
    phone: str | None = None

    entity_type: ClassVar[str] = "company"
    collection: ClassVar[str] = "companies"

    def summarize(self) -> str:
        return f"Company {_text(self.name)} domain {_text(self.domain)} industry {_text(self.industry)}"


@dataclass(frozen=True)
class Contact:
    id: str
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    job_title: str | None = None
    company_id: str | None = None
    status: str = "lead"

    entity_type: ClassVar[str] = "contact"
    collection: ClassVar[str] = "contacts"

    def summarize(self) -> str:
        return (
            f"Contact {_text(self.first_name)} {_text(self.last_name)} "
            f"email {_text(self.email)} phone {_text(self.phone)} "
            f"company {_text(self.company_id)}"
        )


@dataclass(frozen=True)
class Deal:
    id: str
    name: str
    value: Decimal | float | str = Decimal("0")
    stage: str = "lead"
    probability: int | None = 0
    expected_close_date: datetime | None = None
    contact_id: str | None = None
    company_id: str | None = None

    entity_type: ClassVar[str] = "deal"
    collection: ClassVar[str] = "deals"

    def summarize(self) -> str:
        return (
            f"Deal {_text(self.name)} value {_text(self.value)} stage {_text(self.stage)} "
            f"company {_text(self.company_id)} contact {_text(self.contact_id)}"
        )


@dataclass(frozen=True)
class Note:
    id: str
    content: str
    contact_id: str | None = None
    company_id: str | None = None
    deal_id: str | None = None

    entity_type: ClassVar[str] = "note"
    collection: ClassVar[str] = "notes"

    def summarize(self) -> str:
        return f"Note {_text(self.content)}"


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str | None = None
    due_date: datetime | None = None
    completed: str = "false"  # stored as text by the CRM
    priority: str = "medium"
    contact_id: str | None = None
    company_id: str | None = None
    deal_id: str | None = None

    entity_type: ClassVar[str] = "task"
    collection: ClassVar[str] = "tasks"

    def summarize(self) -> str:
        return f"Task {_text(self.title)} due {_text(self.due_date)} completed {_text(self.completed)}"
