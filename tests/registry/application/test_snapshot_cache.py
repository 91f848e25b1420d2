import sqlite3
import unittest
from datetime import datetime, timedelta, timezone

from label_maker.registry.application.snapshot_cache import (
    CACHE_KEY,
    TIMESTAMP_KEY,
    RegistrySnapshotCache,
    to_epoch_ms,
)
from label_maker.registry.infrastructure.kv_store_sqlite import SQLiteKeyValueStore
from tests.utils.fakes import FakeRegistryClient, InMemoryStore
from tests.utils.tempdir import managed_temp_dir

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_cache(store, client):
    return RegistrySnapshotCache(store, client, ttl_hours=12, clock=lambda: NOW)


def stored(names, age: timedelta):
    return {CACHE_KEY: list(names), TIMESTAMP_KEY: to_epoch_ms(NOW - age)}


class RegistrySnapshotCacheTests(unittest.IsolatedAsyncioTestCase):
    async def test_fresh_cache_is_returned_without_network(self):
        store = InMemoryStore(stored(["alice", "bob"], timedelta(hours=1)))
        client = FakeRegistryClient(names=["carol"])

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(client.calls, [])
        self.assertEqual(snapshot.names, frozenset({"alice", "bob"}))
        self.assertEqual(snapshot.origin, "cache")
        self.assertEqual(store.replace_calls, 0)

    async def test_one_second_before_expiry_is_still_a_hit(self):
        store = InMemoryStore(stored(["alice"], timedelta(hours=12) - timedelta(seconds=1)))
        client = FakeRegistryClient(names=["carol"])

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(client.calls, [])
        self.assertEqual(snapshot.origin, "cache")

    async def test_expired_cache_fetches_once_and_replaces_store(self):
        store = InMemoryStore(stored(["alice"], timedelta(hours=12)))
        client = FakeRegistryClient(names=["carol", "dave"])

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(client.calls, ["agent"])
        self.assertEqual(snapshot.names, frozenset({"carol", "dave"}))
        self.assertEqual(snapshot.origin, "remote")
        self.assertEqual(snapshot.captured_at_ms, to_epoch_ms(NOW))
        self.assertEqual(store.values[CACHE_KEY], ["carol", "dave"])
        self.assertEqual(store.values[TIMESTAMP_KEY], to_epoch_ms(NOW))

    async def test_missing_timestamp_forces_fetch(self):
        store = InMemoryStore({CACHE_KEY: ["alice"]})
        client = FakeRegistryClient(names=["alice"])

        await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(len(client.calls), 1)

    async def test_fresh_timestamp_with_corrupted_snapshot_forces_fetch(self):
        store = InMemoryStore({CACHE_KEY: {"not": "a list"}, TIMESTAMP_KEY: to_epoch_ms(NOW)})
        client = FakeRegistryClient(names=["alice"])

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(len(client.calls), 1)
        self.assertEqual(snapshot.origin, "remote")

    async def test_malformed_timestamp_forces_fetch(self):
        store = InMemoryStore({CACHE_KEY: ["alice"], TIMESTAMP_KEY: "yesterday"})
        client = FakeRegistryClient(names=["alice"])

        await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(len(client.calls), 1)

    async def test_fresh_but_empty_list_is_a_valid_snapshot(self):
        store = InMemoryStore({CACHE_KEY: [], TIMESTAMP_KEY: to_epoch_ms(NOW)})
        client = FakeRegistryClient(names=["alice"])

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(client.calls, [])
        self.assertEqual(len(snapshot), 0)

    async def test_failed_fetch_returns_empty_and_keeps_stored_state(self):
        original = stored(["alice"], timedelta(days=2))
        store = InMemoryStore(original)
        client = FakeRegistryClient(names=None)

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(snapshot.origin, "fallback")
        self.assertEqual(len(snapshot), 0)
        self.assertEqual(store.values, original)
        self.assertEqual(store.replace_calls, 0)

    async def test_client_exception_is_contained(self):
        original = stored(["alice"], timedelta(days=2))
        store = InMemoryStore(original)
        client = FakeRegistryClient(error=RuntimeError("boom"))

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(len(snapshot), 0)
        self.assertEqual(store.values, original)

    async def test_persist_failure_still_returns_fetched_snapshot(self):
        original = stored(["alice"], timedelta(days=2))
        store = InMemoryStore(original, fail_on_replace=True)
        client = FakeRegistryClient(names=["bob"])

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(snapshot.names, frozenset({"bob"}))
        self.assertEqual(store.values, original)

    async def test_non_finite_timestamp_forces_single_fetch(self):
        for bad in (float("nan"), float("inf"), float("-inf")):
            with self.subTest(timestamp=bad):
                store = InMemoryStore({CACHE_KEY: ["alice"], TIMESTAMP_KEY: bad})
                client = FakeRegistryClient(names=["bob"])

                snapshot = await make_cache(store, client).get_snapshot(None, "agent")

                self.assertEqual(len(client.calls), 1)
                self.assertEqual(snapshot.origin, "remote")

    async def test_non_finite_timestamp_from_sqlite_store_forces_fetch(self):
        with managed_temp_dir("cache_nan") as tmp:
            store = SQLiteKeyValueStore(tmp / "store.db")
            try:
                store.set(CACHE_KEY, ["alice"])
                store.set(TIMESTAMP_KEY, float("nan"))
                client = FakeRegistryClient(names=["bob"])

                snapshot = await make_cache(store, client).get_snapshot(None, "agent")

                self.assertEqual(len(client.calls), 1)
                self.assertEqual(snapshot.names, frozenset({"bob"}))
                self.assertEqual(store.get(TIMESTAMP_KEY), to_epoch_ms(NOW))
            finally:
                store.close()

    async def test_unreadable_store_is_treated_as_missing_cache(self):
        store = InMemoryStore(
            stored(["alice"], timedelta(hours=1)),
            get_error=sqlite3.OperationalError("database is locked"),
        )
        client = FakeRegistryClient(names=["bob"])

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(len(client.calls), 1)
        self.assertEqual(snapshot.names, frozenset({"bob"}))

    async def test_non_sqlite_persist_error_is_contained(self):
        original = stored(["alice"], timedelta(days=2))
        store = InMemoryStore(original, fail_on_replace=True, replace_error=OSError("read-only filesystem"))
        client = FakeRegistryClient(names=["bob"])

        snapshot = await make_cache(store, client).get_snapshot(None, "agent")

        self.assertEqual(snapshot.names, frozenset({"bob"}))
        self.assertEqual(store.values, original)
