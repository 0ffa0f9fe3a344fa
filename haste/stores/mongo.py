"""
MongoDB Document Store

Persists documents in an `entries` collection, one record per key:
`{"entry_id": key, "value": data, "expiration": deadline}`. Documents that
never expire carry `expiration: -1`.
"""

import logging
from typing import Any, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from haste.common.time import expiry_deadline, unix_now
from haste.stores.base import DocumentStore

logger = logging.getLogger(__name__)

COLLECTION_NAME = "entries"

# Expiration value of documents that never expire
NO_EXPIRATION = -1


def _live_filter(key: str, now: int) -> dict[str, Any]:
    return {
        "entry_id": key,
        "$or": [
            {"expiration": NO_EXPIRATION},
            {"expiration": {"$gt": now}},
        ],
    }


def _expired_filter(now: int) -> dict[str, Any]:
    return {"expiration": {"$ne": NO_EXPIRATION, "$lte": now}}


class MongoDocumentStore(DocumentStore):
    """
    MongoDB Document Store

    `entry_id` carries a unique index. A write to a key held by a live
    document fails on that index and `set` returns False; an expired record
    is replaced in place. Static documents (`skip_expire`) overwrite.
    """

    def __init__(self, client: Any, database: str = "haste", expire: Optional[int] = None):
        """
        Initialize Store

        Args:
            client: pymongo AsyncMongoClient, owned by the store
            database: Database holding the entries collection
            expire: Time to live in seconds
        """
        super().__init__(expire)
        self.client = client
        self.collection = client[database][COLLECTION_NAME]

    async def connect(self) -> None:
        """Verify connectivity and ensure the key index"""
        await self.client.admin.command("ping")
        await self.collection.create_index("entry_id", unique=True)
        logger.info("MongoDB connection established")

    async def close(self) -> None:
        await self.client.close()
        logger.info("MongoDB connection closed")

    async def get(self, key: str, skip_expire: bool = False) -> Optional[str]:
        now = unix_now()
        try:
            entry = await self.collection.find_one(_live_filter(key, now))
        except PyMongoError:
            logger.error(f"Error retrieving value from MongoDB: {key}", exc_info=True)
            return None

        if entry is None:
            return None

        if self.expire and not skip_expire and entry.get("expiration") != NO_EXPIRATION:
            try:
                await self.collection.update_one(
                    {"_id": entry["_id"]},
                    {"$set": {"expiration": expiry_deadline(self.expire, now)}},
                )
            except PyMongoError:
                logger.error(f"Error updating expiration in MongoDB: {key}", exc_info=True)

        return entry["value"]

    async def set(self, key: str, data: str, skip_expire: bool = False) -> bool:
        now = unix_now()
        deadline = None if skip_expire else expiry_deadline(self.expire, now)
        expiration = NO_EXPIRATION if deadline is None else deadline

        # Static documents replace whatever is there; others may only reclaim
        # an expired record, and an upsert against a live one hits the index
        query: dict[str, Any] = {"entry_id": key}
        if not skip_expire:
            query.update(_expired_filter(now))

        try:
            await self.collection.update_one(
                query,
                {"$set": {"entry_id": key, "value": data, "expiration": expiration}},
                upsert=True,
            )
        except DuplicateKeyError:
            logger.warning(f"Refusing to overwrite existing document: {key}")
            return False
        except PyMongoError:
            logger.error(f"Error persisting value to MongoDB: {key}", exc_info=True)
            return False
        return True

    async def cleanup_expired(self) -> int:
        result = await self.collection.delete_many(_expired_filter(unix_now()))
        return result.deleted_count
