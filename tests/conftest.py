"""
Test Configuration Module
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from haste.config import Settings
from haste.db.session import create_engine
from haste.stores.database import DatabaseDocumentStore


class FakeClock:
    """Manually advanced UNIX clock"""

    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_settings(tmp_path):
    """Build settings isolated from the environment and any .env file"""

    def _make(**overrides) -> Settings:
        values = {
            "STORAGE_TYPE": "memory",
            "STORAGE_PATH": str(tmp_path / "data"),
            "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'haste.db'}",
            "RATE_LIMIT_ENABLED": False,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest_asyncio.fixture
async def database_store(tmp_path):
    """Database store on a throwaway SQLite file with a 60 second TTL"""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    store = DatabaseDocumentStore(engine, expire=60)
    await store.connect()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def make_client():
    """Run an app through its lifespan and yield an HTTP client for it"""
    stack = []

    async def _make(app):
        lifespan = app.router.lifespan_context(app)
        await lifespan.__aenter__()
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        stack.append((lifespan, client))
        return client

    yield _make

    for lifespan, client in reversed(stack):
        await client.aclose()
        await lifespan.__aexit__(None, None, None)
