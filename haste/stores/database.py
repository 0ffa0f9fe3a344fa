"""
Database Document Store

Persists documents in a relational table through SQLAlchemy's async ORM.
Works with SQLite (aiosqlite) and PostgreSQL (asyncpg).
"""

import logging
from typing import Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from haste.common.time import expiry_deadline, unix_now
from haste.db.models import Base, DocumentEntry
from haste.stores.base import DocumentStore

logger = logging.getLogger(__name__)


class DatabaseDocumentStore(DocumentStore):
    """
    Database Document Store

    Inserting a key that is already taken by a live document fails on the
    unique constraint and `set` returns False. A row whose expiration has
    passed is replaced in place. Static documents (`skip_expire`) overwrite.

    Every operation runs in its own session, released on exit whether or not
    the expiration refresh succeeded.
    """

    def __init__(self, engine: AsyncEngine, expire: Optional[int] = None):
        """
        Initialize Store

        Args:
            engine: Async engine, owned by the store from now on
            expire: Time to live in seconds
        """
        super().__init__(expire)
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def connect(self) -> None:
        """Create the entries table if missing"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database store ready: {self.engine.url.render_as_string(hide_password=True)}")

    async def close(self) -> None:
        await self.engine.dispose()

    async def get(self, key: str, skip_expire: bool = False) -> Optional[str]:
        now = unix_now()
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    select(DocumentEntry.id, DocumentEntry.value, DocumentEntry.expiration).where(
                        DocumentEntry.key == key,
                        or_(DocumentEntry.expiration.is_(None), DocumentEntry.expiration > now),
                    )
                )
                row = result.first()
            except (SQLAlchemyError, OSError):
                logger.error(f"Error retrieving value from database: {key}", exc_info=True)
                return None

            if row is None:
                return None

            if self.expire and not skip_expire and row.expiration is not None:
                try:
                    await session.execute(
                        update(DocumentEntry)
                        .where(DocumentEntry.id == row.id)
                        .values(expiration=expiry_deadline(self.expire, now))
                    )
                    await session.commit()
                except (SQLAlchemyError, OSError):
                    logger.error(f"Failed to update expiration on GET: {key}", exc_info=True)

            return row.value

    async def set(self, key: str, data: str, skip_expire: bool = False) -> bool:
        now = unix_now()
        expiration = None if skip_expire else expiry_deadline(self.expire, now)
        async with self._session_factory() as session:
            try:
                session.add(DocumentEntry(key=key, value=data, expiration=expiration))
                await session.commit()
                return True
            except IntegrityError:
                await session.rollback()
            except (SQLAlchemyError, OSError):
                logger.error(f"Error persisting value to database: {key}", exc_info=True)
                return False

            # Key exists: static documents overwrite, others may only reclaim an expired row
            statement = update(DocumentEntry).where(DocumentEntry.key == key)
            if not skip_expire:
                statement = statement.where(
                    DocumentEntry.expiration.is_not(None),
                    DocumentEntry.expiration <= now,
                )
            try:
                result = await session.execute(
                    statement.values(value=data, expiration=expiration)
                )
                await session.commit()
            except (SQLAlchemyError, OSError):
                logger.error(f"Error persisting value to database: {key}", exc_info=True)
                return False

            if result.rowcount != 1:
                logger.warning(f"Refusing to overwrite existing document: {key}")
                return False
            return True

    async def cleanup_expired(self) -> int:
        now = unix_now()
        async with self._session_factory() as session:
            result = await session.execute(
                delete(DocumentEntry).where(
                    DocumentEntry.expiration.is_not(None),
                    DocumentEntry.expiration <= now,
                )
            )
            await session.commit()
            return result.rowcount
