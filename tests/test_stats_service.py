"""Tests for period-bucketed trade statistics."""

from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from conftest import FakeTradeStore, make_trade
from errors import InvalidArgumentError
from schemas.trade import Position
from services.cache import ResponseCache
from services.stats_service import Period, TradeStatsService, compute_trade_stats

TODAY = date(2026, 3, 5)  # a Thursday


def closed_trade_strategy():
    return st.builds(
        lambda position, profit: make_trade(position=position, profit=profit),
        position=st.sampled_from([Position.BUY, Position.SELL]),
        profit=st.one_of(
            st.none(),
            st.decimals(
                min_value=Decimal("-5000"),
                max_value=Decimal("5000"),
                places=2,
                allow_nan=False,
                allow_infinity=False,
            ).map(str),
        ),
    )


class TestComputeTradeStats:

    def test_buy_then_profitable_sell(self):
        trades = [
            make_trade(position=Position.BUY, entry_price="189.50"),
            make_trade(position=Position.SELL, entry_price="198.20", profit="87.00"),
        ]

        stats = compute_trade_stats(trades)

        assert stats.total_trades == 2
        assert stats.buy_count == 1
        assert stats.sell_count == 1
        assert stats.win_count == 1
        assert stats.loss_count == 0
        assert stats.win_rate == 100.0
        assert stats.total_profit == Decimal("87.00")
        assert stats.average_profit == Decimal("87.00")
        assert stats.best_trade == Decimal("87.00")
        assert stats.worst_trade == Decimal("87.00")

    def test_breakeven_trade_dilutes_win_rate(self):
        trades = [
            make_trade(position=Position.BUY),
            make_trade(position=Position.SELL, profit="87.00"),
            make_trade(position=Position.SELL, ticker="MSFT", profit="0.00"),
        ]

        stats = compute_trade_stats(trades)

        assert stats.total_trades == 3
        assert stats.win_count == 1
        assert stats.loss_count == 0
        assert stats.win_rate == 50.0
        assert stats.total_profit == Decimal("87.00")
        assert stats.average_profit == Decimal("43.50")
        assert stats.worst_trade == Decimal("0.00")

    def test_no_closed_trades_yields_zeroes(self):
        trades = [make_trade(position=Position.BUY) for _ in range(4)]

        stats = compute_trade_stats(trades)

        assert stats.total_trades == 4
        assert stats.win_rate == 0.0
        assert stats.average_profit == Decimal("0")
        assert stats.best_trade == Decimal("0")
        assert stats.worst_trade == Decimal("0")
        assert stats.total_profit == Decimal("0")

    def test_empty_snapshot(self):
        stats = compute_trade_stats([])

        assert stats.total_trades == 0
        assert stats.win_rate == 0.0

    def test_average_rounds_half_up_to_four_places(self):
        trades = [
            make_trade(position=Position.SELL, profit="0.00005"),
            make_trade(position=Position.SELL, profit="0.00010"),
        ]

        stats = compute_trade_stats(trades)

        # 0.000075 rounds half-up to 0.0001
        assert stats.average_profit == Decimal("0.0001")
        assert stats.average_profit.as_tuple().exponent == -4

    def test_fractional_cents_sum_exactly(self):
        trades = [make_trade(position=Position.SELL, profit="0.01") for _ in range(3)]
        trades.append(make_trade(position=Position.SELL, profit="0.005"))

        stats = compute_trade_stats(trades)

        assert stats.total_profit == Decimal("0.035")

    def test_losses_counted(self):
        trades = [
            make_trade(position=Position.SELL, profit="-12.50"),
            make_trade(position=Position.SELL, profit="40"),
            make_trade(position=Position.SELL, profit="-3"),
        ]

        stats = compute_trade_stats(trades)

        assert stats.win_count == 1
        assert stats.loss_count == 2
        assert stats.best_trade == Decimal("40")
        assert stats.worst_trade == Decimal("-12.50")
        assert stats.win_rate == pytest.approx(100 / 3)


class TestStatsProperties:
    """
    *For any* trade snapshot, win + loss <= closed <= total, the win rate
    stays within [0, 100], and the total equals the exact decimal sum.
    """

    @given(trades=st.lists(closed_trade_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_count_bounds_and_rate_range(self, trades):
        stats = compute_trade_stats(trades)
        closed = [t for t in trades if t.profit is not None]

        assert stats.win_count + stats.loss_count <= len(closed) <= stats.total_trades
        assert 0.0 <= stats.win_rate <= 100.0
        assert stats.buy_count + stats.sell_count == stats.total_trades

    @given(trades=st.lists(closed_trade_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_total_profit_is_exact_decimal_sum(self, trades):
        stats = compute_trade_stats(trades)

        expected = Decimal("0")
        for t in trades:
            if t.profit is not None:
                expected += t.profit

        assert isinstance(stats.total_profit, Decimal)
        assert stats.total_profit == expected

    @given(trades=st.lists(closed_trade_strategy(), min_size=1, max_size=40))
    @settings(max_examples=50)
    def test_best_and_worst_bound_every_closed_trade(self, trades):
        stats = compute_trade_stats(trades)

        for t in trades:
            if t.profit is not None:
                assert stats.worst_trade <= t.profit <= stats.best_trade


class TestPeriod:

    @pytest.mark.parametrize("period, expected", [
        (Period.TODAY, (date(2026, 3, 5), date(2026, 3, 5))),
        (Period.WEEK, (date(2026, 3, 2), date(2026, 3, 5))),
        (Period.MONTH, (date(2026, 3, 1), date(2026, 3, 5))),
        (Period.YEAR, (date(2026, 1, 1), date(2026, 3, 5))),
        (Period.ALL, (None, None)),
    ])
    def test_date_range(self, period, expected):
        assert period.date_range(TODAY) == expected

    def test_week_starts_on_monday_when_today_is_monday(self):
        monday = date(2026, 3, 2)
        assert Period.WEEK.date_range(monday) == (monday, monday)

    def test_week_on_sunday_reaches_back_six_days(self):
        sunday = date(2026, 3, 8)
        assert Period.WEEK.date_range(sunday) == (date(2026, 3, 2), sunday)

    def test_parse_is_case_insensitive(self):
        assert Period.parse(" Month ") is Period.MONTH

    @pytest.mark.parametrize("value", ["", "weekly", "forever", None])
    def test_parse_rejects_unknown_values(self, value):
        with pytest.raises(InvalidArgumentError):
            Period.parse(value)


class TestTradeStatsService:

    def test_scopes_store_query_to_period(self):
        store = FakeTradeStore([
            make_trade(trade_date=date(2026, 2, 27), position=Position.SELL, profit="10"),
            make_trade(trade_date=date(2026, 3, 3), position=Position.SELL, profit="-4"),
        ])
        service = TradeStatsService(store, today=lambda: TODAY)

        stats = service.compute_stats("alice", "week")

        assert store.calls == [("find_by_owner_in_range", "alice", date(2026, 3, 2), TODAY)]
        assert stats.total_trades == 1
        assert stats.loss_count == 1

    def test_all_period_is_unbounded(self):
        store = FakeTradeStore([make_trade(trade_date=date(2019, 1, 1))])
        service = TradeStatsService(store, today=lambda: TODAY)

        stats = service.compute_stats("alice", Period.ALL)

        assert store.calls == [("find_by_owner_in_range", "alice", None, None)]
        assert stats.total_trades == 1

    def test_only_own_trades_are_counted(self):
        store = FakeTradeStore([
            make_trade(user_id="alice", position=Position.SELL, profit="5"),
            make_trade(user_id="bob", position=Position.SELL, profit="500"),
        ])
        service = TradeStatsService(store, today=lambda: TODAY)

        assert service.compute_stats("alice", "all").total_profit == Decimal("5")

    def test_invalid_period_rejected_before_store_access(self):
        store = FakeTradeStore()
        service = TradeStatsService(store, today=lambda: TODAY)

        with pytest.raises(InvalidArgumentError):
            service.compute_stats("alice", "decade")
        assert store.calls == []

    def test_cached_until_trade_namespace_evicted(self):
        store = FakeTradeStore([make_trade(position=Position.SELL, profit="1")])
        cache = ResponseCache(ttl_seconds=300, max_entries=10, enabled=True)
        service = TradeStatsService(store, cache, today=lambda: TODAY)

        first = service.compute_stats("alice", "all")
        second = service.compute_stats("alice", "all")
        assert first == second
        assert len(store.calls) == 1

        cache.evict("trade_stats")
        service.compute_stats("alice", "all")
        assert len(store.calls) == 2
