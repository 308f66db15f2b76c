import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


AWS_REGION = os.getenv("AWS_REGION", "ap-south-1")
DYNAMODB_ENDPOINT_URL = os.getenv("DYNAMODB_ENDPOINT_URL")

USERS_TABLE = os.getenv("USERS_TABLE", "Users")
TRADES_TABLE = os.getenv("TRADES_TABLE", "Trades")
JOURNALS_TABLE = os.getenv("JOURNALS_TABLE", "Journals")
FOLLOWS_TABLE = os.getenv("FOLLOWS_TABLE", "Follows")
TRADE_IMAGES_TABLE = os.getenv("TRADE_IMAGES_TABLE", "TradeImages")
JOURNAL_IMAGES_TABLE = os.getenv("JOURNAL_IMAGES_TABLE", "JournalImages")
STOCKS_TABLE = os.getenv("STOCKS_TABLE", "Stocks")

JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CACHE_ENABLED = _env_bool("CACHE_ENABLED", True)
CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", "300"))
CACHE_MAX_ENTRIES = int(os.getenv("CACHE_MAX_ENTRIES", "500"))

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
