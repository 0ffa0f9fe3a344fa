"""
Redis Document Store

Stores documents as plain Redis strings and relies on native TTL for expiration.
"""

import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from haste.stores.base import DocumentStore

logger = logging.getLogger(__name__)


class RedisDocumentStore(DocumentStore):
    """
    Redis Document Store

    Document creation uses `SET NX`, so a key already taken is never
    overwritten. Static documents are written with a plain `SET`, which also
    clears any TTL left on the key.
    """

    def __init__(self, client: Redis, expire: Optional[int] = None):
        """
        Initialize Store

        Args:
            client: Async Redis client (decode_responses=True), owned by the store
            expire: Time to live in seconds
        """
        super().__init__(expire)
        self.client = client

    async def connect(self) -> None:
        """Verify connectivity"""
        await self.client.ping()
        logger.info("Redis connection established")

    async def close(self) -> None:
        await self.client.aclose()
        logger.info("Redis connection closed")

    async def get(self, key: str, skip_expire: bool = False) -> Optional[str]:
        try:
            value = await self.client.get(key)
        except (RedisError, OSError):
            logger.error(f"Error retrieving value from redis: {key}", exc_info=True)
            return None

        if value is not None and self.expire and not skip_expire:
            try:
                # XX: keys stored without a TTL stay permanent
                await self.client.expire(key, self.expire, xx=True)
            except (RedisError, OSError):
                logger.error(f"Failed to set expiry on key: {key}", exc_info=True)

        return value

    async def set(self, key: str, data: str, skip_expire: bool = False) -> bool:
        ttl = None if skip_expire else self.expire
        try:
            stored = await self.client.set(key, data, ex=ttl, nx=not skip_expire)
        except (RedisError, OSError):
            logger.error(f"Error persisting value to redis: {key}", exc_info=True)
            return False

        if not stored:
            logger.warning(f"Refusing to overwrite existing document: {key}")
            return False
        return True
