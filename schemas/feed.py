from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel

from schemas.journal import Journal
from schemas.trade import Trade
from schemas.user import AuthorSummary


class FeedItem(BaseModel):
    type: Literal["journal", "trade"]
    journal: Optional[Journal] = None
    trade: Optional[Trade] = None
    author: AuthorSummary
    created_at: datetime

    @property
    def item_id(self) -> str:
        return self.journal.id if self.journal is not None else self.trade.id
