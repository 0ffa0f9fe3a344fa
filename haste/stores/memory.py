"""
In-Memory Document Store

Keeps documents in a process-local dict. Intended for development and tests;
content does not survive a restart.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from haste.common.time import expiry_deadline, is_expired, unix_now
from haste.stores.base import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: str
    expires_at: Optional[int]


class MemoryDocumentStore(DocumentStore):
    """
    In-Memory Document Store

    Sliding expiration: every non-skip read pushes the deadline forward.
    Writes for an existing live key are rejected unless `skip_expire` is set,
    so concurrent creates can never overwrite each other.
    """

    def __init__(self, expire: Optional[int] = None, clock: Callable[[], int] = unix_now):
        """
        Initialize Store

        Args:
            expire: Time to live in seconds
            clock: Returns current UNIX time in seconds
        """
        super().__init__(expire)
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def _live_entry(self, key: str) -> Optional[_Entry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if is_expired(entry.expires_at, self._clock()):
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str, skip_expire: bool = False) -> Optional[str]:
        entry = self._live_entry(key)
        if entry is None:
            return None
        if not skip_expire and entry.expires_at is not None:
            entry.expires_at = expiry_deadline(self.expire, self._clock())
        return entry.value

    async def set(self, key: str, data: str, skip_expire: bool = False) -> bool:
        if not skip_expire and self._live_entry(key) is not None:
            logger.warning(f"Refusing to overwrite existing document: {key}")
            return False
        expires_at = None if skip_expire else expiry_deadline(self.expire, self._clock())
        self._entries[key] = _Entry(value=data, expires_at=expires_at)
        return True

    async def cleanup_expired(self) -> int:
        now = self._clock()
        expired = [k for k, e in self._entries.items() if is_expired(e.expires_at, now)]
        for key in expired:
            del self._entries[key]
        return len(expired)
