"""
Test Redis Document Store
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fakeredis import aioredis
from redis.exceptions import ConnectionError as RedisConnectionError

from haste.stores.redis import RedisDocumentStore


@pytest_asyncio.fixture
async def client():
    client = aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.mark.asyncio
async def test_connect_pings(client):
    store = RedisDocumentStore(client)
    await store.connect()


@pytest.mark.asyncio
async def test_set_and_get(client):
    store = RedisDocumentStore(client)

    assert await store.set("abc", "hello") is True
    assert await store.get("abc") == "hello"


@pytest.mark.asyncio
async def test_get_missing_key(client):
    store = RedisDocumentStore(client)

    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_no_expire_means_no_ttl(client):
    store = RedisDocumentStore(client)
    await store.set("abc", "hello")

    assert await client.ttl("abc") == -1


@pytest.mark.asyncio
async def test_set_applies_ttl(client):
    store = RedisDocumentStore(client, expire=60)
    await store.set("abc", "hello")

    assert 0 < await client.ttl("abc") <= 60


@pytest.mark.asyncio
async def test_get_refreshes_ttl(client):
    store = RedisDocumentStore(client, expire=60)
    await store.set("abc", "hello")
    await client.expire("abc", 5)

    assert await store.get("abc") == "hello"
    assert await client.ttl("abc") > 5


@pytest.mark.asyncio
async def test_skip_expire_read_keeps_ttl(client):
    store = RedisDocumentStore(client, expire=60)
    await store.set("abc", "hello")
    await client.expire("abc", 5)

    assert await store.get("abc", skip_expire=True) == "hello"
    assert await client.ttl("abc") <= 5


@pytest.mark.asyncio
async def test_existing_key_not_overwritten(client):
    store = RedisDocumentStore(client)
    await store.set("abc", "first")

    assert await store.set("abc", "second") is False
    assert await store.get("abc") == "first"


@pytest.mark.asyncio
async def test_static_write_overwrites_and_clears_ttl(client):
    store = RedisDocumentStore(client, expire=60)
    await client.set("about", "old", ex=30)

    assert await store.set("about", "new", skip_expire=True) is True
    assert await store.get("about", skip_expire=True) == "new"
    assert await client.ttl("about") == -1


@pytest.mark.asyncio
async def test_get_error_returns_none():
    client = AsyncMock()
    client.get.side_effect = RedisConnectionError("down")
    store = RedisDocumentStore(client, expire=60)

    assert await store.get("abc") is None
    client.expire.assert_not_awaited()


@pytest.mark.asyncio
async def test_refresh_failure_does_not_fail_read():
    client = AsyncMock()
    client.get.return_value = "hello"
    client.expire.side_effect = RedisConnectionError("down")
    store = RedisDocumentStore(client, expire=60)

    assert await store.get("abc") == "hello"


@pytest.mark.asyncio
async def test_set_error_returns_false():
    client = AsyncMock()
    client.set.side_effect = RedisConnectionError("down")
    store = RedisDocumentStore(client, expire=60)

    assert await store.set("abc", "hello") is False


@pytest.mark.asyncio
async def test_read_does_not_age_permanent_key(client):
    await client.set("old", "written before expiration was configured")
    store = RedisDocumentStore(client, expire=60)

    assert await store.get("old") == "written before expiration was configured"
    assert await client.ttl("old") == -1
