"""
Test File Document Store
"""

import hashlib

import pytest
import pytest_asyncio

from haste.stores import file as file_module
from haste.stores.file import FileDocumentStore


@pytest.fixture
def fixed_now(monkeypatch):
    """Freeze the store clock; returns a setter"""
    state = {"now": 1_700_000_000}
    monkeypatch.setattr(file_module, "unix_now", lambda: state["now"])

    def _advance(seconds: int) -> None:
        state["now"] += seconds

    return _advance


@pytest_asyncio.fixture
async def store(tmp_path):
    store = FileDocumentStore(path=str(tmp_path / "data"), expire=60)
    await store.connect()
    return store


@pytest.mark.asyncio
async def test_set_and_get(store):
    assert await store.set("abc", "hello\nworld") is True
    assert await store.get("abc") == "hello\nworld"


@pytest.mark.asyncio
async def test_document_file_named_by_md5(tmp_path):
    store = FileDocumentStore(path=str(tmp_path))
    await store.set("abc", "hello")

    digest = hashlib.md5(b"abc").hexdigest()
    assert (tmp_path / digest).read_text(encoding="utf-8") == "hello"
    assert not (tmp_path / f"{digest}.expire").exists()


@pytest.mark.asyncio
async def test_get_missing_key(store):
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_connect_creates_directory(tmp_path):
    store = FileDocumentStore(path=str(tmp_path / "a" / "b"))
    await store.connect()
    assert (tmp_path / "a" / "b").is_dir()


@pytest.mark.asyncio
async def test_document_expires(store, fixed_now, tmp_path):
    await store.set("abc", "hello")
    fixed_now(61)

    assert await store.get("abc") is None
    # Expired files are removed on read
    assert list((tmp_path / "data").iterdir()) == []


@pytest.mark.asyncio
async def test_reads_slide_expiration(store, fixed_now):
    await store.set("abc", "hello")

    for _ in range(4):
        fixed_now(50)
        assert await store.get("abc") == "hello"


@pytest.mark.asyncio
async def test_skip_expire_read_does_not_refresh(store, fixed_now):
    await store.set("abc", "hello")
    fixed_now(50)
    assert await store.get("abc", skip_expire=True) == "hello"
    fixed_now(20)

    assert await store.get("abc") is None


@pytest.mark.asyncio
async def test_static_document_never_expires(store, fixed_now, tmp_path):
    await store.set("about", "static", skip_expire=True)
    fixed_now(10**6)

    assert await store.get("about", skip_expire=True) == "static"
    digest = hashlib.md5(b"about").hexdigest()
    assert not (tmp_path / "data" / f"{digest}.expire").exists()


@pytest.mark.asyncio
async def test_set_overwrites(store):
    await store.set("abc", "first")
    assert await store.set("abc", "second") is True
    assert await store.get("abc") == "second"


@pytest.mark.asyncio
async def test_set_failure_returns_false(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    store = FileDocumentStore(path=str(blocker))

    assert await store.set("abc", "hello") is False


@pytest.mark.asyncio
async def test_cleanup_expired(store, fixed_now, tmp_path):
    await store.set("old", "a")
    await store.set("static", "b", skip_expire=True)
    fixed_now(30)
    await store.set("fresh", "c")
    fixed_now(40)

    assert await store.cleanup_expired() == 1
    assert not (tmp_path / "data" / hashlib.md5(b"old").hexdigest()).exists()
    assert await store.get("fresh") == "c"
    assert await store.get("static", skip_expire=True) == "b"


@pytest.mark.asyncio
async def test_failed_deadline_write_leaves_no_document(store, tmp_path, monkeypatch):
    async def broken_write_deadline(key, deadline):
        raise OSError("disk full")

    monkeypatch.setattr(store, "_write_deadline", broken_write_deadline)

    assert await store.set("abc", "hello") is False
    assert not (tmp_path / "data" / hashlib.md5(b"abc").hexdigest()).exists()
    assert await store.get("abc") is None
