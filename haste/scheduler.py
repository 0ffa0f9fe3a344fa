"""
Scheduled Task Module

Uses APScheduler to purge expired documents that backends without native
TTL keep on disk or in memory.
"""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from haste.stores.base import DocumentStore, StoreType

logger = logging.getLogger(__name__)

# Backends that leave expired documents behind until they are read
PURGEABLE_STORE_TYPES = {StoreType.MEMORY, StoreType.FILE, StoreType.DATABASE, StoreType.MONGO}


async def cleanup_expired_documents_task(store: DocumentStore):
    """
    Scheduled Expired Document Cleanup Task

    Deletes documents whose expiration has passed.
    """
    logger.info("Starting scheduled expired document cleanup task")

    try:
        deleted_count = await store.cleanup_expired()
        logger.info(
            f"Expired document cleanup task completed: {deleted_count} documents deleted"
        )
    except Exception as e:
        logger.error(f"Expired document cleanup task failed: {str(e)}", exc_info=True)


def start_scheduler(
    store: DocumentStore, store_type: str, interval_minutes: int
) -> Optional[AsyncIOScheduler]:
    """
    Start Scheduled Task Scheduler

    Nothing is scheduled when the store keeps documents forever or expires
    them natively.

    Args:
        store: Document store to purge
        store_type: Configured backend
        interval_minutes: Purge interval

    Returns:
        Optional[AsyncIOScheduler]: Running scheduler, or None when not needed
    """
    if store.expire is None or StoreType(store_type) not in PURGEABLE_STORE_TYPES:
        logger.info("Expired document cleanup skipped (no expiration or native TTL)")
        return None

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        cleanup_expired_documents_task,
        trigger=IntervalTrigger(minutes=interval_minutes),
        args=[store],
        id="cleanup_expired_documents",
        name="Clean up expired documents",
        replace_existing=True,
    )
    scheduler.start()

    logger.info(
        f"Scheduler started: expired document cleanup every {interval_minutes} minutes"
    )
    return scheduler


def shutdown_scheduler(scheduler: Optional[AsyncIOScheduler]):
    """
    Shutdown Scheduled Task Scheduler

    Gracefully stops all scheduled tasks.
    """
    if scheduler is None:
        return

    scheduler.shutdown(wait=True)
    logger.info("Scheduler shutdown completed")
