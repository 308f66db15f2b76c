"""Timeline of followed users' journals and trades."""

import logging
from collections import defaultdict

from schemas.common import Page
from schemas.feed import FeedItem
from services.cache import FEED
from services.paging import validate_page_request

logger = logging.getLogger(__name__)

# Each stream is over-fetched so the merged list still fills the first pages
OVERFETCH_FACTOR = 2


def _rank_key(item: FeedItem):
    return (item.created_at, item.type == "journal", item.item_id)


def _images_by_owner(image_store, entries) -> dict:
    """Image metadata for entries that may belong to several owners."""
    ids_by_owner = defaultdict(list)
    for entry in entries:
        ids_by_owner[entry.user_id].append(entry.id)

    images = {}
    for owner_id, item_ids in ids_by_owner.items():
        images.update(image_store.for_items(item_ids, owner_id))
    return images


class FeedService:

    def __init__(
        self,
        follow_graph,
        journal_store,
        trade_store,
        user_store,
        journal_images,
        trade_images,
        cache=None,
    ):
        self.follow_graph = follow_graph
        self.journal_store = journal_store
        self.trade_store = trade_store
        self.user_store = user_store
        self.journal_images = journal_images
        self.trade_images = trade_images
        self.cache = cache

    def build_feed(self, viewer_id: str, page: int, size: int) -> Page[FeedItem]:
        validate_page_request(page, size)

        if self.cache is None:
            return self._build(viewer_id, page, size)

        return self.cache.get_or_compute(
            FEED,
            viewer_id,
            (page, size),
            lambda: self._build(viewer_id, page, size),
        )

    def _build(self, viewer_id: str, page: int, size: int) -> Page[FeedItem]:
        following_ids = self.follow_graph.following_ids(viewer_id)
        if not following_ids:
            return Page[FeedItem].empty(page, size)

        fetch_size = size * OVERFETCH_FACTOR
        journals = self.journal_store.find_recent_by_owners(following_ids, fetch_size)
        trades = self.trade_store.find_recent_by_owners(following_ids, fetch_size)

        owner_ids = {j.user_id for j in journals} | {t.user_id for t in trades}
        authors = self.user_store.find_by_ids(owner_ids)

        missing = owner_ids - set(authors)
        if missing:
            logger.warning(f"Dropping feed items of unknown authors: {sorted(missing)}")
            journals = [j for j in journals if j.user_id in authors]
            trades = [t for t in trades if t.user_id in authors]

        journal_images = _images_by_owner(self.journal_images, journals)
        trade_images = _images_by_owner(self.trade_images, trades)

        items = []
        for journal in journals:
            author = authors[journal.user_id].summary()
            journal = journal.model_copy(
                update={"images": journal_images.get(journal.id, []), "author": author}
            )
            items.append(FeedItem(
                type="journal",
                journal=journal,
                author=author,
                created_at=journal.created_at,
            ))

        for trade in trades:
            author = authors[trade.user_id].summary()
            trade = trade.model_copy(update={"images": trade_images.get(trade.id, [])})
            items.append(FeedItem(
                type="trade",
                trade=trade,
                author=author,
                created_at=trade.created_at,
            ))

        items.sort(key=_rank_key, reverse=True)

        logger.debug(
            f"Built feed for viewer_id={viewer_id} from {len(journals)} journals "
            f"and {len(trades)} trades"
        )
        return Page[FeedItem].slice(items, page, size)
