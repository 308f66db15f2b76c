import boto3

from config import (
    AWS_REGION,
    DYNAMODB_ENDPOINT_URL,
    USERS_TABLE,
    TRADES_TABLE,
    JOURNALS_TABLE,
    FOLLOWS_TABLE,
    TRADE_IMAGES_TABLE,
    JOURNAL_IMAGES_TABLE,
    STOCKS_TABLE,
)

# Secondary indexes the query helpers rely on
TRADES_BY_CREATED_INDEX = "user_id-created_at-index"
TRADES_BY_DATE_INDEX = "user_id-trade_date-index"
JOURNALS_BY_CREATED_INDEX = "user_id-created_at-index"
JOURNALS_BY_DATE_INDEX = "user_id-journal_date-index"
FOLLOWERS_INDEX = "following_id-index"


def get_dynamodb():
    kwargs = {"region_name": AWS_REGION}
    if DYNAMODB_ENDPOINT_URL:
        kwargs["endpoint_url"] = DYNAMODB_ENDPOINT_URL
    return boto3.resource("dynamodb", **kwargs)


def get_users_table():
    return get_dynamodb().Table(USERS_TABLE)


def get_trades_table():
    return get_dynamodb().Table(TRADES_TABLE)


def get_journals_table():
    return get_dynamodb().Table(JOURNALS_TABLE)


def get_follows_table():
    return get_dynamodb().Table(FOLLOWS_TABLE)


def get_trade_images_table():
    return get_dynamodb().Table(TRADE_IMAGES_TABLE)


def get_journal_images_table():
    return get_dynamodb().Table(JOURNAL_IMAGES_TABLE)


def get_stocks_table():
    return get_dynamodb().Table(STOCKS_TABLE)


def query_all(table, **kwargs) -> list:
    """Run a query and follow LastEvaluatedKey until every page is read."""
    items = []
    while True:
        response = table.query(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key


def scan_all(table, **kwargs) -> list:
    items = []
    while True:
        response = table.scan(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key
