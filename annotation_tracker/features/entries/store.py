"""
Entry Store Module

Thin async wrapper over the MongoDB entries collection. Entries are
append-only: the store inserts, reads, counts and clears, but never
updates a document in place.

Features:
- Insert one entry
- Paginated newest-first listing
- Date lookup
- Chronological read for aggregation
- Whole-collection delete
- Count

Dependencies:
- Motor for async MongoDB
- pymongo for sort constants

Author: Annotation Tracker Team
"""

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from typing import Any, Dict, List, Optional
import logging

from annotation_tracker.shared.database import entries_collection
from .models import serialize_entry

logger = logging.getLogger(__name__)

# _id breaks ties between entries that share a timestamp
NEWEST_FIRST = [("timestamp", DESCENDING), ("_id", DESCENDING)]
OLDEST_FIRST = [("timestamp", ASCENDING), ("_id", ASCENDING)]

class EntryStore:
    """
    Persistent collection of annotation entries.

    Args:
        collection: Motor collection (or anything exposing the same
            insert_one/find/delete_many/count_documents coroutines)
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.collection.insert_one(dict(document))
        logger.info(f"Inserted entry {result.inserted_id} for {document.get('userName')}")
        return serialize_entry({**document, "_id": result.inserted_id})

    async def find_all(self, limit: Optional[int] = None, skip: int = 0) -> List[Dict[str, Any]]:
        """Entries sorted by timestamp, newest first."""
        cursor = self.collection.find({}).sort(NEWEST_FIRST)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=None)
        return [serialize_entry(doc) for doc in docs]

    async def find_by_date(self, entry_date: str) -> List[Dict[str, Any]]:
        cursor = self.collection.find({"date": entry_date}).sort(NEWEST_FIRST)
        docs = await cursor.to_list(length=None)
        return [serialize_entry(doc) for doc in docs]

    async def find_for_report(self, entry_date: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Entries in submission order (oldest first), optionally for one date.

        Aggregation folds entries in the order given, so the most recent
        entry for a slot is the one that wins.
        """
        query = {"date": entry_date} if entry_date else {}
        cursor = self.collection.find(query).sort(OLDEST_FIRST)
        docs = await cursor.to_list(length=None)
        return [serialize_entry(doc) for doc in docs]

    async def delete_all(self) -> int:
        result = await self.collection.delete_many({})
        logger.info(f"Deleted {result.deleted_count} entries")
        return result.deleted_count

    async def count(self) -> int:
        return await self.collection.count_documents({})

def get_entry_store() -> EntryStore:
    """FastAPI dependency returning the store bound to the live collection."""
    return EntryStore(entries_collection)
