from typing import Optional
from pydantic import BaseModel


class Stock(BaseModel):
    ticker: str
    name_en: str
    name_ko: Optional[str] = None
    logo_url: Optional[str] = None

    @classmethod
    def from_item(cls, item: dict) -> "Stock":
        return cls(
            ticker=item["ticker"],
            name_en=item["name_en"],
            name_ko=item.get("name_ko"),
            logo_url=item.get("logo_url"),
        )
