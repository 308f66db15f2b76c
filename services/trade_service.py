import logging
from datetime import date, datetime, timezone
from typing import Optional
from uuid import uuid4

from errors import InvalidArgumentError
from schemas.common import Page
from schemas.trade import Position, Trade, TradeRequest, TradeRetrospectiveRequest
from services.cache import TRADES, TRADE_DETAIL, TRADE_STATS, FEED
from services.paging import validate_page_request

logger = logging.getLogger(__name__)

TRADE_WRITE_NAMESPACES = (TRADES, TRADE_DETAIL, TRADE_STATS, FEED)
RETROSPECTIVE_WRITE_NAMESPACES = (TRADES, TRADE_DETAIL, FEED)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _realized_profit(request: TradeRequest):
    # Only a SELL realizes a result
    return request.profit if request.position.is_sell else None


class TradeService:

    def __init__(self, trade_store, image_store, cache=None, clock=utc_now):
        self.trade_store = trade_store
        self.image_store = image_store
        self.cache = cache
        self.clock = clock

    def list_trades(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        ticker: Optional[str] = None,
        position: Optional[Position] = None,
        page: int = 0,
        size: int = 20,
    ) -> Page[Trade]:
        validate_page_request(page, size)
        ticker = ticker.strip().upper() if ticker else None

        def load():
            trades = self.trade_store.find_filtered(owner_id, start_date, end_date, ticker, position)
            result = Page[Trade].slice(trades, page, size)
            return result.model_copy(update={"content": self._with_images(owner_id, result.content)})

        params = (start_date, end_date, ticker, position, page, size)
        return self._cached(TRADES, owner_id, params, load)

    def get_trade(self, owner_id: str, trade_id: str) -> Trade:
        def load():
            trade = self.trade_store.get(owner_id, trade_id)
            return self._with_images(owner_id, [trade])[0]

        return self._cached(TRADE_DETAIL, owner_id, (trade_id,), load)

    def create_trade(self, owner_id: str, request: TradeRequest) -> Trade:
        trade = self.trade_store.save(self._new_trade(owner_id, request))
        self._evict(TRADE_WRITE_NAMESPACES)

        logger.info(f"Created trade trade_id={trade.id} for user_id={owner_id}")
        return trade

    def bulk_create(self, owner_id: str, requests: list) -> list:
        if not requests:
            raise InvalidArgumentError("At least one trade is required")

        trades = self.trade_store.save_all([self._new_trade(owner_id, r) for r in requests])
        self._evict(TRADE_WRITE_NAMESPACES)

        logger.info(f"Created {len(trades)} trades for user_id={owner_id}")
        return trades

    def update_trade(self, owner_id: str, trade_id: str, request: TradeRequest) -> Trade:
        trade = self.trade_store.get(owner_id, trade_id)
        trade = trade.model_copy(update={
            "ticker": request.ticker,
            "position": request.position,
            "quantity": request.quantity,
            "entry_price": request.entry_price,
            "exit_price": request.exit_price,
            "profit": _realized_profit(request),
            "reason": request.reason,
            "updated_at": self.clock(),
        })
        self.trade_store.save(trade)
        self._evict(TRADE_WRITE_NAMESPACES)

        logger.info(f"Updated trade trade_id={trade_id} for user_id={owner_id}")
        return trade

    def delete_trade(self, owner_id: str, trade_id: str) -> None:
        self.trade_store.get(owner_id, trade_id)
        removed = self.image_store.delete_for_item(trade_id)
        self.trade_store.delete(owner_id, trade_id)
        self._evict(TRADE_WRITE_NAMESPACES)

        logger.info(f"Deleted trade trade_id={trade_id} ({removed} images) for user_id={owner_id}")

    def update_retrospective(
        self, owner_id: str, trade_id: str, request: TradeRetrospectiveRequest
    ) -> Trade:
        if request.rating is not None and not 1 <= request.rating <= 5:
            raise InvalidArgumentError("Rating must be 1-5")

        trade = self.trade_store.get(owner_id, trade_id)
        now = self.clock()
        trade = trade.model_copy(update={
            "retrospective": request.content,
            "rating": request.rating,
            "retrospective_updated_at": now,
            "updated_at": now,
        })
        self.trade_store.save(trade)
        self._evict(RETROSPECTIVE_WRITE_NAMESPACES)
        return trade

    def delete_retrospective(self, owner_id: str, trade_id: str) -> None:
        trade = self.trade_store.get(owner_id, trade_id)
        trade = trade.model_copy(update={
            "retrospective": None,
            "rating": None,
            "retrospective_updated_at": None,
            "updated_at": self.clock(),
        })
        self.trade_store.save(trade)
        self._evict(RETROSPECTIVE_WRITE_NAMESPACES)

    def _new_trade(self, owner_id: str, request: TradeRequest) -> Trade:
        now = self.clock()
        return Trade(
            id=str(uuid4()),
            user_id=owner_id,
            trade_date=request.trade_date,
            ticker=request.ticker,
            position=request.position,
            quantity=request.quantity,
            entry_price=request.entry_price,
            exit_price=request.exit_price,
            profit=_realized_profit(request),
            reason=request.reason,
            created_at=now,
            updated_at=now,
        )

    def _with_images(self, owner_id: str, trades: list) -> list:
        if not trades:
            return trades
        images = self.image_store.for_items([t.id for t in trades], owner_id)
        return [t.model_copy(update={"images": images.get(t.id, [])}) for t in trades]

    def _cached(self, namespace, owner_id, params, loader):
        if self.cache is None:
            return loader()
        return self.cache.get_or_compute(namespace, owner_id, params, loader)

    def _evict(self, namespaces):
        if self.cache is not None:
            self.cache.evict(*namespaces)
