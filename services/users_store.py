import logging
from typing import Iterable, Optional
from boto3.dynamodb.conditions import Attr

from config import USERS_TABLE
from db.dynamodb import get_dynamodb, scan_all
from errors import NotFoundError
from schemas.user import User

logger = logging.getLogger(__name__)

# BatchGetItem accepts at most 100 keys per request
BATCH_GET_LIMIT = 100


class UserStore:

    def __init__(self, table=None, dynamodb=None):
        self.dynamodb = dynamodb if dynamodb is not None else get_dynamodb()
        self.table = table if table is not None else self.dynamodb.Table(USERS_TABLE)

    def find(self, user_id: str) -> Optional[User]:
        response = self.table.get_item(Key={"user_id": user_id})
        item = response.get("Item")
        return User.from_item(item) if item else None

    def get(self, user_id: str) -> User:
        user = self.find(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def find_by_ids(self, user_ids: Iterable[str]) -> dict:
        """Batch lookup; ids with no stored user are simply absent from the result."""
        ids = list(dict.fromkeys(user_ids))
        users = {}
        table_name = self.table.name

        for start in range(0, len(ids), BATCH_GET_LIMIT):
            request = {
                table_name: {
                    "Keys": [{"user_id": uid} for uid in ids[start:start + BATCH_GET_LIMIT]]
                }
            }
            while request:
                response = self.dynamodb.batch_get_item(RequestItems=request)
                for item in response.get("Responses", {}).get(table_name, []):
                    user = User.from_item(item)
                    users[user.id] = user
                request = response.get("UnprocessedKeys") or None

        return users

    def search(self, query: str) -> list:
        items = scan_all(
            self.table,
            FilterExpression=Attr("nickname_lower").contains(query.strip().lower()),
        )
        users = [User.from_item(item) for item in items]
        users.sort(key=lambda u: (u.nickname.lower(), u.id))
        return users

    def update_bio(self, user_id: str, bio: Optional[str]) -> None:
        try:
            self.table.update_item(
                Key={"user_id": user_id},
                UpdateExpression="SET bio = :bio",
                ExpressionAttributeValues={":bio": bio},
                ConditionExpression="attribute_exists(user_id)",
            )
        except self.table.meta.client.exceptions.ConditionalCheckFailedException:
            raise NotFoundError("User not found")

        logger.info(f"Updated bio for user_id={user_id}")
