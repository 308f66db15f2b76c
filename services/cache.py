import logging
import threading
import time
from collections import OrderedDict, defaultdict
from typing import Callable, Hashable

from config import CACHE_ENABLED, CACHE_MAX_ENTRIES, CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)

TRADES = "trades"
TRADE_DETAIL = "trade_detail"
TRADE_STATS = "trade_stats"
JOURNALS = "journals"
JOURNAL_DETAIL = "journal_detail"
FEED = "feed"
FOLLOW_COUNTS = "follow_counts"
USER_PROFILE = "user_profile"
STOCKS = "stocks"


class ResponseCache:
    """In-process TTL cache keyed by (namespace, user_id, params).

    Writes flush whole namespaces. A value computed while its namespace was
    being flushed, or while the whole cache was cleared, is returned to the
    caller but never stored.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        max_entries: int = CACHE_MAX_ENTRIES,
        enabled: bool = CACHE_ENABLED,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.enabled = enabled
        self._clock = clock
        self._entries = OrderedDict()
        self._generations = defaultdict(int)
        self._epoch = 0
        self._lock = threading.Lock()

    def get_or_compute(self, namespace: str, user_id: str, params: tuple, loader: Callable):
        if not self.enabled:
            return loader()

        key = (namespace, user_id, params)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                stored_at, value = entry
                if self._clock() - stored_at < self.ttl_seconds:
                    self._entries.move_to_end(key)
                    return value
                del self._entries[key]
            generation = (self._epoch, self._generations[namespace])

        value = loader()

        with self._lock:
            if (self._epoch, self._generations[namespace]) == generation:
                self._entries[key] = (self._clock(), value)
                self._entries.move_to_end(key)
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)
        return value

    def evict(self, *namespaces: str) -> None:
        with self._lock:
            for namespace in namespaces:
                self._generations[namespace] += 1
            stale = [key for key in self._entries if key[0] in namespaces]
            for key in stale:
                del self._entries[key]

        logger.debug(f"Evicted {len(stale)} cache entries from {', '.join(namespaces)}")

    def clear(self) -> None:
        with self._lock:
            self._epoch += 1
            self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
