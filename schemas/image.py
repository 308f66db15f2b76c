from datetime import datetime
from pydantic import BaseModel


class ImageMeta(BaseModel):
    id: str
    item_id: str
    file_name: str
    content_type: str
    file_size: int
    created_at: datetime

    @classmethod
    def from_item(cls, item: dict, item_key: str) -> "ImageMeta":
        return cls(
            id=item["image_id"],
            item_id=item[item_key],
            file_name=item.get("file_name", "image"),
            content_type=item.get("content_type", "application/octet-stream"),
            file_size=int(item.get("file_size", 0)),
            created_at=item["created_at"],
        )
