import logging
from datetime import date, datetime, timezone
from typing import Optional
from uuid import uuid4

from schemas.common import Page
from schemas.journal import Journal, JournalRequest
from services.cache import JOURNALS, JOURNAL_DETAIL, FEED
from services.paging import validate_page_request

logger = logging.getLogger(__name__)

JOURNAL_WRITE_NAMESPACES = (JOURNALS, JOURNAL_DETAIL, FEED)


class JournalService:

    def __init__(self, journal_store, image_store, cache=None,
                 clock=lambda: datetime.now(timezone.utc)):
        self.journal_store = journal_store
        self.image_store = image_store
        self.cache = cache
        self.clock = clock

    def list_journals(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 0,
        size: int = 20,
    ) -> Page[Journal]:
        validate_page_request(page, size)

        def load():
            journals = self.journal_store.find_filtered(owner_id, start_date, end_date)
            result = Page[Journal].slice(journals, page, size)
            return result.model_copy(update={"content": self._with_images(owner_id, result.content)})

        if self.cache is None:
            return load()
        return self.cache.get_or_compute(
            JOURNALS, owner_id, (start_date, end_date, page, size), load
        )

    def get_journal(self, owner_id: str, journal_id: str) -> Journal:
        def load():
            journal = self.journal_store.get(owner_id, journal_id)
            return self._with_images(owner_id, [journal])[0]

        if self.cache is None:
            return load()
        return self.cache.get_or_compute(JOURNAL_DETAIL, owner_id, (journal_id,), load)

    def create_journal(self, owner_id: str, request: JournalRequest) -> Journal:
        now = self.clock()
        journal = self.journal_store.save(Journal(
            id=str(uuid4()),
            user_id=owner_id,
            title=request.title,
            content=request.content,
            journal_date=request.journal_date,
            created_at=now,
            updated_at=now,
        ))
        self._evict()

        logger.info(f"Created journal journal_id={journal.id} for user_id={owner_id}")
        return journal

    def update_journal(self, owner_id: str, journal_id: str, request: JournalRequest) -> Journal:
        journal = self.journal_store.get(owner_id, journal_id)
        journal = journal.model_copy(update={
            "title": request.title,
            "content": request.content,
            "updated_at": self.clock(),
        })
        self.journal_store.save(journal)
        self._evict()

        logger.info(f"Updated journal journal_id={journal_id} for user_id={owner_id}")
        return journal

    def delete_journal(self, owner_id: str, journal_id: str) -> None:
        self.journal_store.get(owner_id, journal_id)
        self.image_store.delete_for_item(journal_id)
        self.journal_store.delete(owner_id, journal_id)
        self._evict()

        logger.info(f"Deleted journal journal_id={journal_id} for user_id={owner_id}")

    def _with_images(self, owner_id: str, journals: list) -> list:
        if not journals:
            return journals
        images = self.image_store.for_items([j.id for j in journals], owner_id)
        return [j.model_copy(update={"images": images.get(j.id, [])}) for j in journals]

    def _evict(self):
        if self.cache is not None:
            self.cache.evict(*JOURNAL_WRITE_NAMESPACES)
