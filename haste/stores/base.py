"""
Document Store Interface

Defines the persistence contract every backend implements.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class StoreType(str, Enum):
    """Supported document store backends"""

    MEMORY = "memory"
    FILE = "file"
    DATABASE = "database"
    REDIS = "redis"
    S3 = "s3"
    MONGO = "mongo"


class DocumentStore(ABC):
    """
    Document Store Interface

    Maps keys to document content with an optional store-wide expiration.

    Contract shared by all implementations:
    - Backend errors never escape `get`/`set`; they are logged and reported
      as `None`/`False`.
    - Without an expiration documents are kept forever; with one, expired
      documents read back as `None`.
    - `skip_expire=True` writes a document without expiration and reads it
      without refreshing any expiration.
    - Implementations are safe to call concurrently from many requests.
    """

    def __init__(self, expire: Optional[int] = None):
        """
        Initialize Store

        Args:
            expire: Time to live in seconds (None or <= 0 means never expires)
        """
        self.expire = expire if expire and expire > 0 else None

    async def connect(self) -> None:
        """
        Verify the backend is reachable

        Called once at startup. Errors propagate so the service refuses to
        start with a broken store.
        """

    async def close(self) -> None:
        """Release the backend client"""

    @abstractmethod
    async def get(self, key: str, skip_expire: bool = False) -> Optional[str]:
        """
        Get document by key

        Backends with sliding expiration push the deadline forward on a
        successful read unless `skip_expire` is set. A failed refresh does
        not fail the read.

        Args:
            key: Document key
            skip_expire: Do not refresh the expiration

        Returns:
            Document content, or None if missing, expired or unreadable
        """
        pass

    @abstractmethod
    async def set(self, key: str, data: str, skip_expire: bool = False) -> bool:
        """
        Store document under key

        Args:
            key: Document key
            data: Document content
            skip_expire: Store without expiration

        Returns:
            True if the document was persisted, False otherwise
        """
        pass

    async def cleanup_expired(self) -> int:
        """
        Delete expired documents still physically present

        Backends relying on native TTL (or keeping no TTL) have nothing to do.

        Returns:
            Number of deleted documents
        """
        return 0
