import sqlite3

import pytest

from logdrop.errors import StorageError
from logdrop.models import LogMetadata
from logdrop.repository import SQLiteLogStore
from logdrop.storage import MemoryLogStore


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture(params=["memory", "sqlite"])
def store_and_clock(request, tmp_path):
    clock = FakeClock()
    if request.param == "memory":
        store = MemoryLogStore(clock=clock)
    else:
        store = SQLiteLogStore(str(tmp_path / "nested" / "logs.db"), clock=clock)
    store.init()
    return store, clock


def metadata(name: str = "a.log") -> LogMetadata:
    return LogMetadata(name=name, type="text/plain", size=5, last_modified=1, uploaded_at=1)


def test_put_then_get_returns_content_and_metadata(store_and_clock):
    store, _ = store_and_clock
    store.put("k1", b"hello", ttl_seconds=60, metadata=metadata())

    content, meta = store.get_with_metadata("k1", cache_ttl=60)
    assert content == b"hello"
    assert meta == metadata()


def test_missing_key_returns_nothing(store_and_clock):
    store, _ = store_and_clock
    assert store.get_with_metadata("absent") == (None, None)


def test_entries_expire_after_ttl(store_and_clock):
    store, clock = store_and_clock
    store.put("k1", b"hello", ttl_seconds=60, metadata=metadata())

    clock.now += 59
    assert store.get_with_metadata("k1")[0] == b"hello"

    clock.now += 1
    assert store.get_with_metadata("k1") == (None, None)


def test_delete_is_idempotent(store_and_clock):
    store, _ = store_and_clock
    store.put("k1", b"hello", ttl_seconds=60, metadata=metadata())

    store.delete("k1")
    store.delete("k1")
    store.delete("never-existed")
    assert store.get_with_metadata("k1") == (None, None)


def test_purge_expired_removes_only_expired(store_and_clock):
    store, clock = store_and_clock
    store.put("short", b"a", ttl_seconds=10, metadata=metadata())
    store.put("long", b"b", ttl_seconds=100, metadata=metadata())

    clock.now += 50
    assert store.purge_expired() == 1
    assert store.get_with_metadata("long")[0] == b"b"
    assert store.purge_expired() == 0


def test_memory_store_does_not_share_metadata_objects():
    store = MemoryLogStore()
    meta = metadata()
    store.put("k1", b"hello", ttl_seconds=60, metadata=meta)
    meta.name = "changed.log"

    assert store.get_with_metadata("k1")[1].name == "a.log"


def test_sqlite_store_wraps_driver_errors(tmp_path):
    store = SQLiteLogStore(str(tmp_path))
    with pytest.raises(StorageError):
        store.get_with_metadata("k1")


def test_sqlite_store_requires_schema(tmp_path):
    store = SQLiteLogStore(str(tmp_path / "logs.db"))
    with pytest.raises(StorageError):
        store.put("k1", b"hello", ttl_seconds=60, metadata=metadata())


def test_put_reclaims_expired_entries(store_and_clock):
    store, clock = store_and_clock
    for index in range(100):
        store.put(f"old-{index}", b"x", ttl_seconds=1, metadata=metadata())

    clock.now += 10
    store.put("fresh", b"y", ttl_seconds=60, metadata=metadata())

    assert store.purge_expired() == 0
    assert store.get_with_metadata("fresh")[0] == b"y"
    assert store.get_with_metadata("old-0") == (None, None)


def test_stores_hold_only_live_entries_after_put(tmp_path):
    clock = FakeClock()
    memory = MemoryLogStore(clock=clock)
    sqlite_store = SQLiteLogStore(str(tmp_path / "logs.db"), clock=clock)
    sqlite_store.init()
    for store in (memory, sqlite_store):
        for index in range(100):
            store.put(f"old-{index}", b"x", ttl_seconds=1, metadata=metadata())

    clock.now += 10
    for store in (memory, sqlite_store):
        store.put("fresh", b"y", ttl_seconds=60, metadata=metadata())

    assert len(memory) == 1
    conn = sqlite3.connect(tmp_path / "logs.db")
    count = conn.execute("SELECT COUNT(*) FROM logs").fetchone()[0]
    conn.close()
    assert count == 1
