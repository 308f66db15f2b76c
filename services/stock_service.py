import logging

from services.cache import STOCKS

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10

# Ticker lookups are the same for every user
SHARED_CACHE_USER = "*"


class StockService:

    def __init__(self, stock_store, cache=None):
        self.stock_store = stock_store
        self.cache = cache

    def search(self, query: str) -> list:
        if not query or not query.strip():
            return []

        query = query.strip()
        if self.cache is None:
            return self._search(query)
        return self.cache.get_or_compute(
            STOCKS, SHARED_CACHE_USER, (query,), lambda: self._search(query)
        )

    def _search(self, query: str) -> list:
        stocks = self.stock_store.search(query)[:SEARCH_LIMIT]
        logger.debug(f"Stock search q={query!r} matched {len(stocks)}")
        return stocks
