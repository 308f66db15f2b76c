from boto3.dynamodb.conditions import Attr

from db.dynamodb import get_stocks_table, scan_all
from schemas.stock import Stock


def _match_rank(stock: Stock, query: str):
    ticker = stock.ticker.upper()
    if ticker == query:
        rank = 0
    elif ticker.startswith(query):
        rank = 1
    else:
        rank = 2
    return (rank, stock.ticker)


class StockStore:
    """Listed tickers, keyed by `ticker`.

    `name_en_upper` is written alongside `name_en` so English names can be
    matched case-insensitively in a scan filter.
    """

    def __init__(self, table=None):
        self.table = table if table is not None else get_stocks_table()

    def search(self, query: str) -> list:
        """Tickers or names containing `query`.

        Exact ticker matches come first, then ticker prefixes, then the rest,
        each group in ticker order.
        """
        upper = query.upper()
        items = scan_all(
            self.table,
            FilterExpression=(
                Attr("ticker").contains(upper)
                | Attr("name_en_upper").contains(upper)
                | Attr("name_ko").contains(query)
            ),
        )
        stocks = [Stock.from_item(item) for item in items]
        stocks.sort(key=lambda s: _match_rank(s, upper))
        return stocks
