import logging
from datetime import date
from typing import Iterable, Optional
from boto3.dynamodb.conditions import Attr, Key

from db.dynamodb import (
    get_trades_table,
    query_all,
    TRADES_BY_CREATED_INDEX,
    TRADES_BY_DATE_INDEX,
)
from errors import NotFoundError
from schemas.trade import Position, Trade

logger = logging.getLogger(__name__)


def _date_condition(owner_id: str, start_date: Optional[date], end_date: Optional[date]):
    condition = Key("user_id").eq(owner_id)
    if start_date and end_date:
        return condition & Key("trade_date").between(
            start_date.isoformat(), end_date.isoformat()
        )
    if start_date:
        return condition & Key("trade_date").gte(start_date.isoformat())
    if end_date:
        return condition & Key("trade_date").lte(end_date.isoformat())
    return condition


class TradeStore:

    def __init__(self, table=None):
        self.table = table if table is not None else get_trades_table()

    def find_by_owner_in_range(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list:
        if start_date is None and end_date is None:
            items = query_all(
                self.table,
                KeyConditionExpression=Key("user_id").eq(owner_id),
            )
        else:
            items = query_all(
                self.table,
                IndexName=TRADES_BY_DATE_INDEX,
                KeyConditionExpression=_date_condition(owner_id, start_date, end_date),
            )
        return [Trade.from_item(item) for item in items]

    def find_recent_by_owners(self, owner_ids: Iterable[str], limit: int) -> list:
        """Newest `limit` trades across all owners, newest first.

        Each owner's index partition is already ordered by creation time, so
        the first `limit` items of every partition cover the global top `limit`.
        """
        trades = []
        for owner_id in owner_ids:
            response = self.table.query(
                IndexName=TRADES_BY_CREATED_INDEX,
                KeyConditionExpression=Key("user_id").eq(owner_id),
                ScanIndexForward=False,
                Limit=limit,
            )
            trades.extend(Trade.from_item(item) for item in response.get("Items", []))

        trades.sort(key=lambda t: (t.created_at, t.id), reverse=True)
        return trades[:limit]

    def find_filtered(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        ticker: Optional[str] = None,
        position: Optional[Position] = None,
    ) -> list:
        """All matching trades ordered by trade date, then creation, newest first."""
        kwargs = {
            "IndexName": TRADES_BY_DATE_INDEX,
            "KeyConditionExpression": _date_condition(owner_id, start_date, end_date),
            "ScanIndexForward": False,
        }

        filters = None
        if ticker:
            filters = Attr("ticker").eq(ticker.upper())
        if position is not None:
            position_filter = Attr("position").eq(position.value)
            filters = position_filter if filters is None else filters & position_filter
        if filters is not None:
            kwargs["FilterExpression"] = filters

        trades = [Trade.from_item(item) for item in query_all(self.table, **kwargs)]
        trades.sort(key=lambda t: (t.trade_date, t.created_at), reverse=True)
        return trades

    def get(self, owner_id: str, trade_id: str) -> Trade:
        response = self.table.get_item(Key={"user_id": owner_id, "trade_id": trade_id})
        item = response.get("Item")
        if not item:
            raise NotFoundError("Trade not found")
        return Trade.from_item(item)

    def save(self, trade: Trade) -> Trade:
        self.table.put_item(Item=trade.to_item())
        return trade

    def save_all(self, trades: list) -> list:
        try:
            with self.table.batch_writer(overwrite_by_pkeys=["user_id", "trade_id"]) as batch:
                for trade in trades:
                    batch.put_item(Item=trade.to_item())
        except Exception as e:
            logger.exception(f"Failed saving {len(trades)} trades in batch: {str(e)}")
            raise

        logger.info(f"Saved {len(trades)} trades in batch")
        return trades

    def delete(self, owner_id: str, trade_id: str) -> None:
        self.table.delete_item(Key={"user_id": owner_id, "trade_id": trade_id})
