from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from schemas.image import ImageMeta


class Position(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

    @property
    def is_buy(self) -> bool:
        return self is Position.BUY

    @property
    def is_sell(self) -> bool:
        return self is Position.SELL


class TradeRequest(BaseModel):
    trade_date: date
    ticker: str = Field(..., min_length=1, max_length=10)
    position: Position
    quantity: Decimal = Field(..., gt=0)
    entry_price: Decimal = Field(..., gt=0)
    exit_price: Optional[Decimal] = None
    profit: Optional[Decimal] = None
    reason: Optional[str] = None

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("ticker must not be blank")
        return v


class TradeRetrospectiveRequest(BaseModel):
    content: Optional[str] = Field(default=None, max_length=1000)
    rating: Optional[int] = None


class Trade(BaseModel):
    id: str
    user_id: str
    trade_date: date
    ticker: str
    position: Position
    quantity: Decimal
    entry_price: Decimal
    exit_price: Optional[Decimal] = None
    profit: Optional[Decimal] = None
    reason: Optional[str] = None
    retrospective: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    retrospective_updated_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    images: List[ImageMeta] = Field(default_factory=list)

    @classmethod
    def from_item(cls, item: dict) -> "Trade":
        rating = item.get("rating")
        return cls(
            id=item["trade_id"],
            user_id=item["user_id"],
            trade_date=item["trade_date"],
            ticker=item["ticker"],
            position=item["position"],
            quantity=item["quantity"],
            entry_price=item["entry_price"],
            exit_price=item.get("exit_price"),
            profit=item.get("profit"),
            reason=item.get("reason"),
            retrospective=item.get("retrospective"),
            rating=int(rating) if rating is not None else None,
            retrospective_updated_at=item.get("retrospective_updated_at"),
            created_at=item["created_at"],
            updated_at=item["updated_at"],
        )

    def to_item(self) -> dict:
        item = {
            "user_id": self.user_id,
            "trade_id": self.id,
            "trade_date": self.trade_date.isoformat(),
            "ticker": self.ticker,
            "position": self.position.value,
            "quantity": self.quantity,
            "entry_price": self.entry_price,
            "exit_price": self.exit_price,
            "profit": self.profit,
            "reason": self.reason,
            "retrospective": self.retrospective,
            "rating": self.rating,
            "retrospective_updated_at": (
                self.retrospective_updated_at.isoformat()
                if self.retrospective_updated_at else None
            ),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
        # DynamoDB index keys cannot hold NULL, so absent values are left out
        return {k: v for k, v in item.items() if v is not None}


class TradeStats(BaseModel):
    total_trades: int = 0
    buy_count: int = 0
    sell_count: int = 0
    win_count: int = 0
    loss_count: int = 0
    win_rate: float = 0.0
    total_profit: Decimal = Decimal("0")
    average_profit: Decimal = Decimal("0")
    best_trade: Decimal = Decimal("0")
    worst_trade: Decimal = Decimal("0")
