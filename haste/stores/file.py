"""
File Document Store

Stores each document as a file named by the MD5 digest of its key.
Expiration deadlines live in a `<digest>.expire` side file holding the UNIX
timestamp; documents without a side file never expire.
"""

import hashlib
import logging
import secrets
from typing import Optional

import anyio

from haste.common.time import expiry_deadline, is_expired, unix_now
from haste.stores.base import DocumentStore

logger = logging.getLogger(__name__)

EXPIRE_SUFFIX = ".expire"


def md5(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()


class FileDocumentStore(DocumentStore):
    """
    File Document Store

    Writes go through a temporary file and an atomic rename, so concurrent
    readers never observe partial content. Writing an existing key overwrites it.
    """

    def __init__(self, path: str = "./data", expire: Optional[int] = None):
        """
        Initialize Store

        Args:
            path: Base directory for document files
            expire: Time to live in seconds
        """
        super().__init__(expire)
        self.base_path = anyio.Path(path)

    def _document_path(self, key: str) -> anyio.Path:
        return self.base_path / md5(key)

    def _expire_path(self, key: str) -> anyio.Path:
        return self.base_path / f"{md5(key)}{EXPIRE_SUFFIX}"

    async def connect(self) -> None:
        await self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Directory ensured: {self.base_path}")

    async def _write_atomic(self, target: anyio.Path, data: str) -> None:
        tmp = target.with_name(f"{target.name}.tmp-{secrets.token_hex(4)}")
        try:
            await tmp.write_text(data, encoding="utf-8")
            await tmp.replace(target)
        finally:
            await tmp.unlink(missing_ok=True)

    async def _read_deadline(self, key: str) -> Optional[int]:
        try:
            raw = await self._expire_path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        return int(raw.strip())

    async def _write_deadline(self, key: str, deadline: Optional[int]) -> None:
        if deadline is None:
            await self._expire_path(key).unlink(missing_ok=True)
        else:
            await self._write_atomic(self._expire_path(key), str(deadline))

    async def _discard(self, key: str) -> None:
        """Remove both files of a key; a failed write must not leave a readable document"""
        try:
            await self._document_path(key).unlink(missing_ok=True)
            await self._expire_path(key).unlink(missing_ok=True)
        except OSError:
            logger.warning(f"Failed to remove partial document: {key}", exc_info=True)

    async def get(self, key: str, skip_expire: bool = False) -> Optional[str]:
        document_path = self._document_path(key)
        now = unix_now()
        try:
            deadline = await self._read_deadline(key)
            if is_expired(deadline, now):
                logger.info(f"Document expired: {key}")
                await document_path.unlink(missing_ok=True)
                await self._expire_path(key).unlink(missing_ok=True)
                return None
            data = await document_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"File not found: {document_path}")
            return None
        except (OSError, ValueError):
            logger.error(f"Error reading data from file: {document_path}", exc_info=True)
            return None

        if not skip_expire and deadline is not None:
            try:
                await self._write_deadline(key, expiry_deadline(self.expire, now))
            except OSError:
                logger.error(f"Failed to update expiration on GET: {key}", exc_info=True)

        return data

    async def set(self, key: str, data: str, skip_expire: bool = False) -> bool:
        document_path = self._document_path(key)
        deadline = None if skip_expire else expiry_deadline(self.expire, unix_now())
        try:
            await self._write_atomic(document_path, data)
            await self._write_deadline(key, deadline)
        except OSError:
            logger.error(f"Error saving data to file: {document_path}", exc_info=True)
            await self._discard(key)
            return False
        logger.debug(f"Data saved to file: {document_path}")
        return True

    async def cleanup_expired(self) -> int:
        now = unix_now()
        deleted = 0
        async for expire_path in self.base_path.glob(f"*{EXPIRE_SUFFIX}"):
            try:
                deadline = int((await expire_path.read_text(encoding="utf-8")).strip())
            except (OSError, ValueError):
                logger.warning(f"Unreadable expiration file: {expire_path}")
                continue
            if not is_expired(deadline, now):
                continue
            document_path = expire_path.with_name(expire_path.name[: -len(EXPIRE_SUFFIX)])
            await document_path.unlink(missing_ok=True)
            await expire_path.unlink(missing_ok=True)
            deleted += 1
        return deleted
