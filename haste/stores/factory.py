"""
Document Store Factory Module

Builds the configured document store together with the backend client it owns.
"""

import logging
import warnings
from urllib.parse import urlparse

from haste.config import Settings
from haste.stores.base import DocumentStore, StoreType

logger = logging.getLogger(__name__)


def _check_redis_security(redis_url: str) -> None:
    """
    Check Redis connection security.

    Warns if Redis URL has no password and is not a localhost connection.
    """
    parsed = urlparse(redis_url)
    has_password = bool(parsed.password)
    is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")

    if not has_password and not is_localhost:
        warnings.warn(
            "SECURITY WARNING: Redis connection has no password and is not connecting to localhost. "
            "Please set a password in REDIS_URL using the format: redis://:password@host:port/db",
            UserWarning,
            stacklevel=3,
        )
        logger.warning("Redis connection without password to non-localhost host detected.")


def create_document_store(settings: Settings) -> DocumentStore:
    """
    Create document store for the configured backend

    Clients are created here and handed to the store, which closes them on
    shutdown. Nothing connects yet; call `store.connect()` for that.

    Args:
        settings: Application configuration

    Returns:
        DocumentStore: Store instance

    Raises:
        ValueError: Unsupported store type or missing backend parameters
    """
    store_type = StoreType(settings.STORAGE_TYPE)
    expire = settings.EXPIRE_SECONDS

    if store_type == StoreType.MEMORY:
        from haste.stores.memory import MemoryDocumentStore

        return MemoryDocumentStore(expire=expire)

    if store_type == StoreType.FILE:
        from haste.stores.file import FileDocumentStore

        return FileDocumentStore(path=settings.STORAGE_PATH, expire=expire)

    if store_type == StoreType.DATABASE:
        from haste.db.session import create_engine
        from haste.stores.database import DatabaseDocumentStore

        engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        return DatabaseDocumentStore(engine, expire=expire)

    if store_type == StoreType.REDIS:
        from redis.asyncio import Redis

        from haste.stores.redis import RedisDocumentStore

        _check_redis_security(settings.REDIS_URL)
        client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
        return RedisDocumentStore(client, expire=expire)

    if store_type == StoreType.S3:
        import boto3

        from haste.stores.s3 import S3DocumentStore

        if not settings.S3_BUCKET:
            raise ValueError("S3_BUCKET is required when STORAGE_TYPE is 's3'")
        client = boto3.client("s3", region_name=settings.S3_REGION)
        return S3DocumentStore(client, bucket=settings.S3_BUCKET, expire=expire)

    if store_type == StoreType.MONGO:
        from pymongo import AsyncMongoClient

        from haste.stores.mongo import MongoDocumentStore

        client = AsyncMongoClient(settings.MONGO_URL)
        return MongoDocumentStore(client, database=settings.MONGO_DATABASE, expire=expire)

    raise ValueError(f"Unsupported store type: {settings.STORAGE_TYPE}")
