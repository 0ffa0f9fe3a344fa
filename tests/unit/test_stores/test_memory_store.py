"""
Test In-Memory Document Store
"""

import pytest

from haste.stores.memory import MemoryDocumentStore


@pytest.mark.asyncio
async def test_set_and_get():
    store = MemoryDocumentStore()

    assert await store.set("abc", "hello") is True
    assert await store.get("abc") == "hello"


@pytest.mark.asyncio
async def test_get_missing_key():
    store = MemoryDocumentStore()

    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_no_expiration_keeps_documents(clock):
    store = MemoryDocumentStore(clock=clock)
    await store.set("abc", "hello")

    clock.advance(10**9)

    assert await store.get("abc") == "hello"


def test_non_positive_expire_means_permanent(clock):
    store = MemoryDocumentStore(expire=0, clock=clock)
    assert store.expire is None


@pytest.mark.asyncio
async def test_document_expires_without_reads(clock):
    store = MemoryDocumentStore(expire=60, clock=clock)
    await store.set("abc", "hello")

    clock.advance(61)

    assert await store.get("abc") is None


@pytest.mark.asyncio
async def test_reads_slide_expiration(clock):
    store = MemoryDocumentStore(expire=60, clock=clock)
    await store.set("abc", "hello")

    for _ in range(5):
        clock.advance(50)
        assert await store.get("abc") == "hello"


@pytest.mark.asyncio
async def test_skip_expire_read_does_not_refresh(clock):
    store = MemoryDocumentStore(expire=60, clock=clock)
    await store.set("abc", "hello")

    clock.advance(50)
    assert await store.get("abc", skip_expire=True) == "hello"
    clock.advance(20)

    assert await store.get("abc") is None


@pytest.mark.asyncio
async def test_skip_expire_write_never_expires(clock):
    store = MemoryDocumentStore(expire=60, clock=clock)
    await store.set("about", "static", skip_expire=True)

    clock.advance(3600)

    assert await store.get("about", skip_expire=True) == "static"


@pytest.mark.asyncio
async def test_existing_key_not_overwritten():
    store = MemoryDocumentStore()
    await store.set("abc", "first")

    assert await store.set("abc", "second") is False
    assert await store.get("abc") == "first"


@pytest.mark.asyncio
async def test_expired_key_can_be_reused(clock):
    store = MemoryDocumentStore(expire=60, clock=clock)
    await store.set("abc", "first")
    clock.advance(61)

    assert await store.set("abc", "second") is True
    assert await store.get("abc") == "second"


@pytest.mark.asyncio
async def test_static_write_overwrites():
    store = MemoryDocumentStore()
    await store.set("about", "old", skip_expire=True)

    assert await store.set("about", "new", skip_expire=True) is True
    assert await store.get("about", skip_expire=True) == "new"


@pytest.mark.asyncio
async def test_cleanup_expired(clock):
    store = MemoryDocumentStore(expire=60, clock=clock)
    await store.set("old_1", "a")
    await store.set("old_2", "b")
    await store.set("static", "c", skip_expire=True)
    clock.advance(30)
    await store.set("fresh", "d")
    clock.advance(40)

    assert await store.cleanup_expired() == 2
    assert await store.get("fresh") == "d"
    assert await store.get("static", skip_expire=True) == "c"
