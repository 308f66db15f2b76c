"""Period-bucketed trade performance statistics."""

import logging
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple

from errors import InvalidArgumentError
from schemas.trade import Position, TradeStats
from services.cache import TRADE_STATS

logger = logging.getLogger(__name__)

AVERAGE_PROFIT_QUANT = Decimal("0.0001")


class Period(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

    @classmethod
    def parse(cls, value) -> "Period":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"Invalid period: {value}")

    def date_range(self, today: date) -> Tuple[Optional[date], Optional[date]]:
        """Inclusive [start, end] for this period; (None, None) means unbounded."""
        if self is Period.TODAY:
            return today, today
        if self is Period.WEEK:
            return today - timedelta(days=today.weekday()), today
        if self is Period.MONTH:
            return today.replace(day=1), today
        if self is Period.YEAR:
            return today.replace(month=1, day=1), today
        return None, None


def compute_trade_stats(trades: Iterable) -> TradeStats:
    """Aggregate a snapshot of trades.

    A trade is closed when it carries a profit. Breakeven closed trades
    (profit == 0) count toward the closed total but are neither wins nor
    losses, so they pull the win rate down.
    """
    trades = list(trades)
    closed = [t.profit for t in trades if t.profit is not None]

    win_count = sum(1 for p in closed if p > 0)
    loss_count = sum(1 for p in closed if p < 0)
    total_profit = sum(closed, Decimal("0"))

    if closed:
        win_rate = win_count / len(closed) * 100
        average_profit = (total_profit / len(closed)).quantize(
            AVERAGE_PROFIT_QUANT, rounding=ROUND_HALF_UP
        )
        best_trade = max(closed)
        worst_trade = min(closed)
    else:
        win_rate = 0.0
        average_profit = Decimal("0")
        best_trade = Decimal("0")
        worst_trade = Decimal("0")

    return TradeStats(
        total_trades=len(trades),
        buy_count=sum(1 for t in trades if t.position == Position.BUY),
        sell_count=sum(1 for t in trades if t.position == Position.SELL),
        win_count=win_count,
        loss_count=loss_count,
        win_rate=win_rate,
        total_profit=total_profit,
        average_profit=average_profit,
        best_trade=best_trade,
        worst_trade=worst_trade,
    )


class TradeStatsService:

    def __init__(self, trade_store, cache=None, today: Callable[[], date] = date.today):
        self.trade_store = trade_store
        self.cache = cache
        self.today = today

    def compute_stats(self, user_id: str, period) -> TradeStats:
        period = Period.parse(period)
        today = self.today()

        if self.cache is None:
            return self._compute(user_id, period, today)

        return self.cache.get_or_compute(
            TRADE_STATS,
            user_id,
            (period.value, today.isoformat()),
            lambda: self._compute(user_id, period, today),
        )

    def _compute(self, user_id: str, period: Period, today: date) -> TradeStats:
        start_date, end_date = period.date_range(today)
        trades = self.trade_store.find_by_owner_in_range(user_id, start_date, end_date)
        stats = compute_trade_stats(trades)

        logger.debug(
            f"Computed {period.value} stats for user_id={user_id}: "
            f"{stats.total_trades} trades, win_rate={stats.win_rate:.2f}"
        )
        return stats
