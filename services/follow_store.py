import logging
from datetime import datetime, timezone
from boto3.dynamodb.conditions import Key

from db.dynamodb import get_follows_table, query_all, FOLLOWERS_INDEX
from errors import ConflictError

logger = logging.getLogger(__name__)


class FollowStore:
    """Directed follow graph: one item per (follower_id, following_id) edge."""

    def __init__(self, table=None):
        self.table = table if table is not None else get_follows_table()

    def is_following(self, follower_id: str, target_id: str) -> bool:
        response = self.table.get_item(
            Key={"follower_id": follower_id, "following_id": target_id}
        )
        return "Item" in response

    def following_ids(self, user_id: str) -> set:
        items = query_all(
            self.table,
            KeyConditionExpression=Key("follower_id").eq(user_id),
        )
        return {item["following_id"] for item in items}

    def follower_count(self, user_id: str) -> int:
        return self._count(
            IndexName=FOLLOWERS_INDEX,
            KeyConditionExpression=Key("following_id").eq(user_id),
        )

    def following_count(self, user_id: str) -> int:
        return self._count(
            KeyConditionExpression=Key("follower_id").eq(user_id),
        )

    def list_followers(self, user_id: str) -> list:
        """Follower ids of `user_id`, newest edge first."""
        items = query_all(
            self.table,
            IndexName=FOLLOWERS_INDEX,
            KeyConditionExpression=Key("following_id").eq(user_id),
        )
        items.sort(key=lambda item: item.get("created_at", ""), reverse=True)
        return [item["follower_id"] for item in items]

    def list_following(self, user_id: str) -> list:
        """Ids `user_id` follows, newest edge first."""
        items = query_all(
            self.table,
            KeyConditionExpression=Key("follower_id").eq(user_id),
        )
        items.sort(key=lambda item: item.get("created_at", ""), reverse=True)
        return [item["following_id"] for item in items]

    def add(self, follower_id: str, following_id: str) -> None:
        try:
            self.table.put_item(
                Item={
                    "follower_id": follower_id,
                    "following_id": following_id,
                    "created_at": datetime.now(timezone.utc).isoformat(),
                },
                ConditionExpression="attribute_not_exists(following_id)",
            )
        except self.table.meta.client.exceptions.ConditionalCheckFailedException:
            raise ConflictError("Already following")

        logger.info(f"follower_id={follower_id} now follows following_id={following_id}")

    def remove(self, follower_id: str, following_id: str) -> None:
        self.table.delete_item(
            Key={"follower_id": follower_id, "following_id": following_id}
        )
        logger.info(f"follower_id={follower_id} unfollowed following_id={following_id}")

    def _count(self, **kwargs) -> int:
        total = 0
        while True:
            response = self.table.query(Select="COUNT", **kwargs)
            total += response.get("Count", 0)
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return total
            kwargs["ExclusiveStartKey"] = last_key
