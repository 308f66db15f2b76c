"""Shared fixtures: in-memory collaborators standing in for the DynamoDB stores."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from itertools import count

import pytest

from errors import ConflictError, NotFoundError
from schemas.image import ImageMeta
from schemas.journal import Journal
from schemas.stock import Stock
from schemas.trade import Position, Trade
from schemas.user import User

BASE_TIME = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)

_ids = count(1)


def make_trade(user_id="alice", position=Position.BUY, profit=None, ticker="AAPL",
               trade_date=date(2026, 3, 2), created_at=None, trade_id=None,
               quantity="10", entry_price="189.50"):
    created_at = created_at or BASE_TIME + timedelta(minutes=next(_ids))
    return Trade(
        id=trade_id or f"t-{next(_ids)}",
        user_id=user_id,
        trade_date=trade_date,
        ticker=ticker,
        position=position,
        quantity=Decimal(quantity),
        entry_price=Decimal(entry_price),
        profit=Decimal(profit) if profit is not None else None,
        created_at=created_at,
        updated_at=created_at,
    )


def make_journal(user_id="alice", title="Morning notes", created_at=None,
                 journal_date=date(2026, 3, 2), journal_id=None):
    created_at = created_at or BASE_TIME + timedelta(minutes=next(_ids))
    return Journal(
        id=journal_id or f"j-{next(_ids)}",
        user_id=user_id,
        title=title,
        content="Stayed patient on the open.",
        journal_date=journal_date,
        created_at=created_at,
        updated_at=created_at,
    )


def make_user(user_id, nickname=None, bio=None):
    return User(
        id=user_id,
        email=f"{user_id}@example.com",
        nickname=nickname or user_id.capitalize(),
        bio=bio,
        created_at=BASE_TIME,
    )


class FakeFollowGraph:

    def __init__(self, edges=()):
        self.edges = set(edges)
        self.calls = []

    def is_following(self, follower_id, target_id):
        self.calls.append(("is_following", follower_id, target_id))
        return (follower_id, target_id) in self.edges

    def following_ids(self, user_id):
        self.calls.append(("following_ids", user_id))
        return {b for a, b in self.edges if a == user_id}

    def follower_count(self, user_id):
        return sum(1 for _, b in self.edges if b == user_id)

    def following_count(self, user_id):
        return sum(1 for a, _ in self.edges if a == user_id)

    def list_followers(self, user_id):
        return sorted(a for a, b in self.edges if b == user_id)

    def list_following(self, user_id):
        return sorted(b for a, b in self.edges if a == user_id)

    def add(self, follower_id, following_id):
        if (follower_id, following_id) in self.edges:
            raise ConflictError("Already following")
        self.edges.add((follower_id, following_id))

    def remove(self, follower_id, following_id):
        self.edges.discard((follower_id, following_id))


class FakeTradeStore:

    def __init__(self, trades=()):
        self.trades = {t.id: t for t in trades}
        self.calls = []

    def find_by_owner_in_range(self, owner_id, start_date=None, end_date=None):
        self.calls.append(("find_by_owner_in_range", owner_id, start_date, end_date))
        return self._owned_in_range(owner_id, start_date, end_date)

    def _owned_in_range(self, owner_id, start_date, end_date):
        return [
            t for t in self.trades.values()
            if t.user_id == owner_id
            and (start_date is None or t.trade_date >= start_date)
            and (end_date is None or t.trade_date <= end_date)
        ]

    def find_recent_by_owners(self, owner_ids, limit):
        self.calls.append(("find_recent_by_owners", frozenset(owner_ids), limit))
        owned = [t for t in self.trades.values() if t.user_id in owner_ids]
        owned.sort(key=lambda t: (t.created_at, t.id), reverse=True)
        return owned[:limit]

    def find_filtered(self, owner_id, start_date=None, end_date=None, ticker=None, position=None):
        self.calls.append(("find_filtered", owner_id, start_date, end_date, ticker, position))
        trades = [
            t for t in self._owned_in_range(owner_id, start_date, end_date)
            if (ticker is None or t.ticker == ticker)
            and (position is None or t.position == position)
        ]
        trades.sort(key=lambda t: (t.trade_date, t.created_at), reverse=True)
        return trades

    def get(self, owner_id, trade_id):
        trade = self.trades.get(trade_id)
        if trade is None or trade.user_id != owner_id:
            raise NotFoundError("Trade not found")
        return trade

    def save(self, trade):
        self.trades[trade.id] = trade
        return trade

    def save_all(self, trades):
        for trade in trades:
            self.save(trade)
        return trades

    def delete(self, owner_id, trade_id):
        self.trades.pop(trade_id, None)


class FakeJournalStore:

    def __init__(self, journals=()):
        self.journals = {j.id: j for j in journals}
        self.calls = []

    def find_recent_by_owners(self, owner_ids, limit):
        self.calls.append(("find_recent_by_owners", frozenset(owner_ids), limit))
        owned = [j for j in self.journals.values() if j.user_id in owner_ids]
        owned.sort(key=lambda j: (j.created_at, j.id), reverse=True)
        return owned[:limit]

    def find_filtered(self, owner_id, start_date=None, end_date=None):
        self.calls.append(("find_filtered", owner_id, start_date, end_date))
        journals = [
            j for j in self.journals.values()
            if j.user_id == owner_id
            and (start_date is None or j.journal_date >= start_date)
            and (end_date is None or j.journal_date <= end_date)
        ]
        journals.sort(key=lambda j: (j.journal_date, j.created_at), reverse=True)
        return journals

    def get(self, owner_id, journal_id):
        journal = self.journals.get(journal_id)
        if journal is None or journal.user_id != owner_id:
            raise NotFoundError("Journal not found")
        return journal

    def save(self, journal):
        self.journals[journal.id] = journal
        return journal

    def delete(self, owner_id, journal_id):
        self.journals.pop(journal_id, None)


class FakeUserStore:

    def __init__(self, users=()):
        self.users = {u.id: u for u in users}
        self.calls = []

    def find(self, user_id):
        return self.users.get(user_id)

    def get(self, user_id):
        if user_id not in self.users:
            raise NotFoundError("User not found")
        return self.users[user_id]

    def find_by_ids(self, user_ids):
        user_ids = list(user_ids)
        self.calls.append(("find_by_ids", frozenset(user_ids)))
        return {uid: self.users[uid] for uid in user_ids if uid in self.users}

    def search(self, query):
        q = query.strip().lower()
        return sorted(
            (u for u in self.users.values() if q in u.nickname.lower()),
            key=lambda u: (u.nickname.lower(), u.id),
        )

    def update_bio(self, user_id, bio):
        user = self.get(user_id)
        self.users[user_id] = user.model_copy(update={"bio": bio})


class FakeImageStore:

    def __init__(self, images=None):
        # {item_id: [ImageMeta]}
        self.images = dict(images or {})
        self.owners = {}
        self.calls = []

    def add(self, item_id, owner_id, file_name="chart.png"):
        meta = ImageMeta(
            id=f"img-{next(_ids)}",
            item_id=item_id,
            file_name=file_name,
            content_type="image/png",
            file_size=2048,
            created_at=BASE_TIME,
        )
        self.images.setdefault(item_id, []).append(meta)
        self.owners[item_id] = owner_id
        return meta

    def for_items(self, item_ids, owner_id):
        item_ids = list(item_ids)
        self.calls.append(("for_items", tuple(item_ids), owner_id))
        return {
            item_id: self.images[item_id]
            for item_id in item_ids
            if item_id in self.images and self.owners.get(item_id) == owner_id
        }

    def delete_for_item(self, item_id):
        self.calls.append(("delete_for_item", item_id))
        return len(self.images.pop(item_id, []))



class FakeStockStore:

    def __init__(self, stocks=()):
        self.stocks = list(stocks)
        self.calls = []

    def search(self, query):
        self.calls.append(("search", query))
        upper = query.upper()
        return sorted(
            (s for s in self.stocks if upper in s.ticker or upper in s.name_en.upper()),
            key=lambda s: (s.ticker != upper, not s.ticker.startswith(upper), s.ticker),
        )


def make_stock(ticker, name_en=None, name_ko=None):
    return Stock(ticker=ticker, name_en=name_en or f"{ticker} Inc.", name_ko=name_ko)


@pytest.fixture
def follow_graph():
    return FakeFollowGraph()


@pytest.fixture
def trade_store():
    return FakeTradeStore()


@pytest.fixture
def journal_store():
    return FakeJournalStore()


@pytest.fixture
def user_store():
    return FakeUserStore([make_user(uid) for uid in ("alice", "bob", "carol", "dave")])


@pytest.fixture
def trade_images():
    return FakeImageStore()


@pytest.fixture
def journal_images():
    return FakeImageStore()
