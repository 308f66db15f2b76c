from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from schemas.image import ImageMeta
from schemas.user import AuthorSummary


class JournalRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1)
    journal_date: date

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class Journal(BaseModel):
    id: str
    user_id: str
    title: str
    content: str
    journal_date: date
    created_at: datetime
    updated_at: datetime
    images: List[ImageMeta] = Field(default_factory=list)
    author: Optional[AuthorSummary] = None

    @classmethod
    def from_item(cls, item: dict) -> "Journal":
        return cls(
            id=item["journal_id"],
            user_id=item["user_id"],
            title=item["title"],
            content=item["content"],
            journal_date=item["journal_date"],
            created_at=item["created_at"],
            updated_at=item["updated_at"],
        )

    def to_item(self) -> dict:
        return {
            "user_id": self.user_id,
            "journal_id": self.id,
            "title": self.title,
            "content": self.content,
            "journal_date": self.journal_date.isoformat(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
