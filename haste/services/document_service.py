"""
Document Service Module

Creates documents under freshly generated keys and serves them back.
"""

import logging
from collections.abc import Mapping
from typing import Iterable, Optional

import anyio

from haste.common.errors import DocumentNotFoundError, DocumentTooLargeError, StorageError
from haste.domain.document import Document
from haste.key_generators.base import KeyGenerator
from haste.stores.base import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_KEY_LENGTH = 10


class DocumentService:
    """
    Document Service

    Sits between the HTTP layer and the document store. Keys are chosen by
    generating candidates until the store reports one unused. The check and
    the following write are not atomic; stores that reject writes to a taken
    key turn a lost race into a StorageError instead of an overwrite.
    """

    def __init__(
        self,
        store: DocumentStore,
        key_generator: KeyGenerator,
        key_length: int = DEFAULT_KEY_LENGTH,
        max_length: Optional[int] = None,
        static_keys: Optional[Iterable[str]] = None,
    ):
        """
        Initialize Service

        Args:
            store: Document store
            key_generator: Candidate key source
            key_length: Generated key length
            max_length: Maximum document length in characters (None disables)
            static_keys: Keys of static documents, never aged by reads
        """
        self.store = store
        self.key_generator = key_generator
        self.key_length = key_length
        self.max_length = max_length
        self.static_keys: set[str] = set(static_keys or ())

    @staticmethod
    def strip_extension(raw_key: str) -> str:
        """Drop everything from the first '.' on ("abc.md" -> "abc")"""
        return raw_key.split(".", 1)[0]

    def is_static(self, key: str) -> bool:
        return key in self.static_keys

    async def choose_key(self) -> str:
        """
        Generate candidates until one is unused

        There is no retry cap: running out of keys means KEY_LENGTH is too
        small for the store, not a runtime condition.
        """
        attempts = 0
        while True:
            attempts += 1
            key = self.key_generator.create_key(self.key_length)
            # Probing must not refresh the TTL of the document it collides with
            if await self.store.get(key, skip_expire=True) is None:
                if attempts > 1:
                    logger.info(f"Key chosen after {attempts} attempts")
                return key

    async def create_document(self, content: str) -> str:
        """
        Store new document

        Args:
            content: Document content

        Returns:
            str: Generated key

        Raises:
            DocumentTooLargeError: Content longer than max_length
            StorageError: Store failed to persist the document
        """
        if self.max_length is not None and len(content) > self.max_length:
            logger.warning(f"Document exceeds maxLength: {self.max_length}")
            raise DocumentTooLargeError(
                details={"length": len(content), "max_length": self.max_length}
            )

        key = await self.choose_key()
        if not await self.store.set(key, content, skip_expire=False):
            logger.error(f"Error adding document: {key}")
            raise StorageError(details={"key": key})

        logger.info(f"Added document: {key}")
        return key

    async def retrieve_document(self, raw_key: str) -> Document:
        """
        Get document by key

        Args:
            raw_key: Key as requested, optionally with a file extension

        Returns:
            Document: Key without extension and stored content

        Raises:
            DocumentNotFoundError: Missing or expired document
        """
        key = self.strip_extension(raw_key)
        data = await self.store.get(key, skip_expire=self.is_static(key))
        if data is None:
            logger.info(f"Document not found: {key}")
            raise DocumentNotFoundError()

        logger.debug(f"Retrieved document: {key}")
        return Document(key=key, data=data)

    async def load_static_documents(self, documents: Mapping[str, str]) -> int:
        """
        Load static documents from disk into the store

        Static documents are written without expiration. Every configured
        key is registered, loaded or not, so that reads never refresh or age
        it. Unreadable files and failed writes are logged and skipped.

        Args:
            documents: Key -> file path

        Returns:
            int: Number of documents loaded
        """
        loaded = 0
        for key, path in documents.items():
            self.static_keys.add(key)
            try:
                data = await anyio.Path(path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to load static document: {key} - {str(e)}")
                continue

            if not await self.store.set(key, data, skip_expire=True):
                logger.warning(f"Failed to store static document: {key}")
                continue

            loaded += 1
            logger.debug(f"Loaded static document: {key}")
        return loaded
