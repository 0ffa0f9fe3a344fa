"""
Test Expired Document Cleanup Scheduling
"""

from unittest.mock import AsyncMock

import pytest

from haste.scheduler import (
    cleanup_expired_documents_task,
    shutdown_scheduler,
    start_scheduler,
)
from haste.stores.memory import MemoryDocumentStore


@pytest.mark.asyncio
async def test_cleanup_task_purges_store(clock):
    store = MemoryDocumentStore(expire=60, clock=clock)
    await store.set("abc", "hello")
    clock.advance(61)

    await cleanup_expired_documents_task(store)

    assert store._entries == {}


@pytest.mark.asyncio
async def test_cleanup_task_failure_is_logged_not_raised(caplog):
    store = AsyncMock()
    store.cleanup_expired.side_effect = RuntimeError("disk gone")

    await cleanup_expired_documents_task(store)

    assert "Expired document cleanup task failed" in caplog.text


@pytest.mark.asyncio
async def test_no_scheduler_without_expiration():
    assert start_scheduler(MemoryDocumentStore(), "memory", 60) is None


@pytest.mark.asyncio
async def test_no_scheduler_for_native_ttl_backends():
    store = MemoryDocumentStore(expire=60)
    assert start_scheduler(store, "redis", 60) is None
    assert start_scheduler(store, "s3", 60) is None


@pytest.mark.asyncio
async def test_scheduler_registers_cleanup_job():
    scheduler = start_scheduler(MemoryDocumentStore(expire=60), "memory", 15)
    try:
        job = scheduler.get_job("cleanup_expired_documents")
        assert job is not None
        assert job.trigger.interval.total_seconds() == 15 * 60
    finally:
        shutdown_scheduler(scheduler)


def test_shutdown_none_is_noop():
    shutdown_scheduler(None)
