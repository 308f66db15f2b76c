import logging
from typing import Iterable
from boto3.dynamodb.conditions import Attr, Key

from db.dynamodb import get_trade_images_table, get_journal_images_table, query_all
from schemas.image import ImageMeta

logger = logging.getLogger(__name__)


class ImageStore:
    """Image metadata attached to trades or journals.

    The binary payload lives in external blob storage; only the metadata is
    kept here, partitioned by the owning item id.
    """

    def __init__(self, table, item_key: str):
        self.table = table
        self.item_key = item_key

    def for_items(self, item_ids: Iterable[str], owner_id: str) -> dict:
        images = {}
        for item_id in item_ids:
            items = query_all(
                self.table,
                KeyConditionExpression=Key(self.item_key).eq(item_id),
                FilterExpression=Attr("user_id").eq(owner_id),
            )
            if not items:
                continue
            metas = [ImageMeta.from_item(item, self.item_key) for item in items]
            metas.sort(key=lambda m: (m.created_at, m.id))
            images[item_id] = metas
        return images

    def delete_for_item(self, item_id: str) -> int:
        items = query_all(
            self.table,
            KeyConditionExpression=Key(self.item_key).eq(item_id),
        )
        try:
            with self.table.batch_writer() as batch:
                for item in items:
                    batch.delete_item(
                        Key={self.item_key: item_id, "image_id": item["image_id"]}
                    )
        except Exception as e:
            logger.exception(f"Failed deleting images of {self.item_key}={item_id}: {str(e)}")
            raise
        return len(items)


def trade_image_store(table=None) -> ImageStore:
    return ImageStore(table if table is not None else get_trade_images_table(), "trade_id")


def journal_image_store(table=None) -> ImageStore:
    return ImageStore(table if table is not None else get_journal_images_table(), "journal_id")
