"""Document builder — projects CRM records into flat, embeddable text documents."""

import asyncio
import logging
from collections.abc import Awaitable, Sequence

from app.application.interfaces.crm_record_repository import CrmRecordRepository
from app.domain.entities import Document, Summarizable
from app.domain.exceptions import RecordFetchError

logger = logging.getLogger(__name__)


def to_document(record: Summarizable) -> Document:
    """Build the Document for a single record."""
    return Document(
        id=f"{record.entity_type}:{record.id}",
        text=record.summarize(),
        source=record.collection,
    )


class DocumentBuilder:
    """Reads every CRM collection and emits one Document per record.

    All five collections are fetched concurrently. If any fetch fails the
    whole build fails; a partial document set is never returned.
    """

    def __init__(self, repository: CrmRecordRepository):
        self._repository = repository

    async def build(self, user_id: str) -> list[Document]:
        contacts, companies, deals, notes, tasks = await asyncio.gather(
            self._fetch("contacts", self._repository.list_contacts()),
            self._fetch("companies", self._repository.list_companies()),
            self._fetch("deals", self._repository.list_deals()),
            self._fetch("notes", self._repository.list_notes()),
            self._fetch("tasks", self._repository.list_tasks()),
        )

        documents: list[Document] = []
        for records in (contacts, companies, deals, notes, tasks):
            documents.extend(to_document(r) for r in records)

        logger.debug(
            "Built %d documents for user %s (contacts=%d, companies=%d, deals=%d, notes=%d, tasks=%d)",
            len(documents),
            user_id,
            len(contacts),
            len(companies),
            len(deals),
            len(notes),
            len(tasks),
        )
        return documents

    @staticmethod
    async def _fetch(
        collection: str, fetch: Awaitable[Sequence[Summarizable]]
    ) -> Sequence[Summarizable]:
        try:
            return await fetch
        except Exception as exc:
            logger.error("Fetching %s failed: %s", collection, exc)
            raise RecordFetchError(collection, str(exc)) from exc
