"""FastAPI providers wiring stores and services together.

Stores are built per request (boto3 resources are not shared across
threads); the response cache is process-wide.
"""

from functools import lru_cache
from fastapi import Depends

from services.access import AccessGate
from services.cache import ResponseCache
from services.feed_service import FeedService
from services.follow_service import FollowService
from services.follow_store import FollowStore
from services.images_store import journal_image_store, trade_image_store
from services.journal_service import JournalService
from services.journals_store import JournalStore
from services.stats_service import TradeStatsService
from services.stock_service import StockService
from services.stocks_store import StockStore
from services.trade_service import TradeService
from services.trades_store import TradeStore
from services.user_service import UserService
from services.users_store import UserStore


@lru_cache
def get_cache() -> ResponseCache:
    return ResponseCache()


def get_follow_store() -> FollowStore:
    return FollowStore()


def get_trade_store() -> TradeStore:
    return TradeStore()


def get_journal_store() -> JournalStore:
    return JournalStore()


def get_user_store() -> UserStore:
    return UserStore()


def get_stock_store() -> StockStore:
    return StockStore()


def get_access_gate(follow_store: FollowStore = Depends(get_follow_store)) -> AccessGate:
    return AccessGate(follow_store)


def get_trade_service(
    trade_store: TradeStore = Depends(get_trade_store),
    cache: ResponseCache = Depends(get_cache),
) -> TradeService:
    return TradeService(trade_store, trade_image_store(), cache)


def get_journal_service(
    journal_store: JournalStore = Depends(get_journal_store),
    cache: ResponseCache = Depends(get_cache),
) -> JournalService:
    return JournalService(journal_store, journal_image_store(), cache)


def get_stats_service(
    trade_store: TradeStore = Depends(get_trade_store),
    cache: ResponseCache = Depends(get_cache),
) -> TradeStatsService:
    return TradeStatsService(trade_store, cache)


def get_follow_service(
    follow_store: FollowStore = Depends(get_follow_store),
    user_store: UserStore = Depends(get_user_store),
    cache: ResponseCache = Depends(get_cache),
) -> FollowService:
    return FollowService(follow_store, user_store, cache)


def get_feed_service(
    follow_store: FollowStore = Depends(get_follow_store),
    journal_store: JournalStore = Depends(get_journal_store),
    trade_store: TradeStore = Depends(get_trade_store),
    user_store: UserStore = Depends(get_user_store),
    cache: ResponseCache = Depends(get_cache),
) -> FeedService:
    return FeedService(
        follow_store,
        journal_store,
        trade_store,
        user_store,
        journal_image_store(),
        trade_image_store(),
        cache,
    )


def get_user_service(
    user_store: UserStore = Depends(get_user_store),
    follow_service: FollowService = Depends(get_follow_service),
    access_gate: AccessGate = Depends(get_access_gate),
    trade_service: TradeService = Depends(get_trade_service),
    journal_service: JournalService = Depends(get_journal_service),
    cache: ResponseCache = Depends(get_cache),
) -> UserService:
    return UserService(
        user_store, follow_service, access_gate, trade_service, journal_service, cache
    )


def get_stock_service(
    stock_store: StockStore = Depends(get_stock_store),
    cache: ResponseCache = Depends(get_cache),
) -> StockService:
    return StockService(stock_store, cache)
