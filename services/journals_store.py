from datetime import date
from typing import Iterable, Optional
from boto3.dynamodb.conditions import Key

from db.dynamodb import (
    get_journals_table,
    query_all,
    JOURNALS_BY_CREATED_INDEX,
    JOURNALS_BY_DATE_INDEX,
)
from errors import NotFoundError
from schemas.journal import Journal


class JournalStore:

    def __init__(self, table=None):
        self.table = table if table is not None else get_journals_table()

    def find_recent_by_owners(self, owner_ids: Iterable[str], limit: int) -> list:
        journals = []
        for owner_id in owner_ids:
            response = self.table.query(
                IndexName=JOURNALS_BY_CREATED_INDEX,
                KeyConditionExpression=Key("user_id").eq(owner_id),
                ScanIndexForward=False,
                Limit=limit,
            )
            journals.extend(Journal.from_item(item) for item in response.get("Items", []))

        journals.sort(key=lambda j: (j.created_at, j.id), reverse=True)
        return journals[:limit]

    def find_filtered(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list:
        """Journals of one owner ordered by journal date, then creation, newest first."""
        condition = Key("user_id").eq(owner_id)
        if start_date and end_date:
            condition = condition & Key("journal_date").between(
                start_date.isoformat(), end_date.isoformat()
            )
        elif start_date:
            condition = condition & Key("journal_date").gte(start_date.isoformat())
        elif end_date:
            condition = condition & Key("journal_date").lte(end_date.isoformat())

        items = query_all(
            self.table,
            IndexName=JOURNALS_BY_DATE_INDEX,
            KeyConditionExpression=condition,
            ScanIndexForward=False,
        )
        journals = [Journal.from_item(item) for item in items]
        journals.sort(key=lambda j: (j.journal_date, j.created_at), reverse=True)
        return journals

    def get(self, owner_id: str, journal_id: str) -> Journal:
        response = self.table.get_item(Key={"user_id": owner_id, "journal_id": journal_id})
        item = response.get("Item")
        if not item:
            raise NotFoundError("Journal not found")
        return Journal.from_item(item)

    def save(self, journal: Journal) -> Journal:
        self.table.put_item(Item=journal.to_item())
        return journal

    def delete(self, owner_id: str, journal_id: str) -> None:
        self.table.delete_item(Key={"user_id": owner_id, "journal_id": journal_id})
