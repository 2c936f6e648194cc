"""
Unit tests for the mapping cache and its storage backends.
"""

import asyncio
import json
from datetime import timedelta

import pytest
from unittest.mock import patch

from field_matcher.cache.mapping_cache import MappingCache, cache_key
from field_matcher.cache.storage import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from field_matcher.models.cache import CacheEntry


STORAGE_KEY = "fieldMappingCache"


class FailingStore(KeyValueStore):
    """Store whose every call fails."""

    async def get(self, key):
        raise RuntimeError("storage offline")

    async def set(self, key, value):
        raise RuntimeError("storage offline")

    async def remove(self, key):
        raise RuntimeError("storage offline")


class CountingStore(InMemoryKeyValueStore):
    """In-memory store counting writes."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = 0

    async def set(self, key, value):
        self.writes += 1
        await super().set(key, value)


class FlakyStore(CountingStore):
    """In-memory store whose first reads fail."""

    def __init__(self, initial=None, failed_reads=1):
        super().__init__(initial)
        self.failed_reads = failed_reads

    async def get(self, key):
        if self.failed_reads:
            self.failed_reads -= 1
            raise RuntimeError("storage busy")
        return await super().get(key)


def _blob(now, **ages_in_days):
    return {
        label: CacheEntry(field=label.lower(), confidence=0.9, timestamp=now - timedelta(days=age))
        .model_dump(mode="json")
        for label, age in ages_in_days.items()
    }


class TestCacheKey:
    """Test cache_key function."""

    @pytest.mark.unit
    def test_trimmed_not_normalized(self):
        """Test only outer whitespace is removed."""
        assert cache_key("  Email ID* ") == "Email ID*"
        assert cache_key(None) == ""


class TestStoreAndGet:
    """Test MappingCache.store and get."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_roundtrip(self, mapping_cache, fixed_clock):
        """Test a stored association can be read back."""
        await mapping_cache.store("  Email ID ", "email", 0.91)

        entry = await mapping_cache.get("Email ID")

        assert entry.field == "email"
        assert entry.confidence == pytest.approx(0.91)
        assert entry.timestamp == fixed_clock()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_key_is_case_sensitive(self, mapping_cache):
        """Test labels are not normalized."""
        await mapping_cache.store("Email ID", "email", 0.9)

        assert await mapping_cache.get("email id") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_overwrite(self, mapping_cache):
        """Test storing again replaces the entry."""
        await mapping_cache.store("Year", "yearOfGraduation", 0.7)
        await mapping_cache.store("Year", "yearOfStudy", 0.6)

        entry = await mapping_cache.get("Year")

        assert entry.field == "yearOfStudy"
        assert len(mapping_cache) == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_label_ignored(self, mapping_cache, memory_store):
        """Test blank labels are never stored."""
        await mapping_cache.store("   ", "email", 0.9)

        assert await memory_store.get(STORAGE_KEY) is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_persisted_as_one_blob(self, mapping_cache, memory_store):
        """Test all entries live under the single storage slot."""
        await mapping_cache.store("City", "city", 0.8)
        await mapping_cache.store("State", "state", 0.75)

        blob = await memory_store.get(STORAGE_KEY)

        assert set(blob) == {"City", "State"}
        assert blob["City"]["field"] == "city"
        assert isinstance(blob["City"]["timestamp"], str)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_loaded_from_existing_blob(self, fixed_clock):
        """Test entries written by an earlier session are read."""
        store = InMemoryKeyValueStore({STORAGE_KEY: _blob(fixed_clock(), Branch=2)})
        cache = MappingCache(store, storage_key=STORAGE_KEY, clock=fixed_clock)

        entry = await cache.get("Branch")

        assert entry.field == "branch"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_epoch_millisecond_timestamps(self, fixed_clock):
        """Test legacy millisecond timestamps are accepted."""
        millis = int(fixed_clock().timestamp() * 1000)
        store = InMemoryKeyValueStore(
            {STORAGE_KEY: {"PRN": {"field": "prnNumber", "confidence": 0.8, "timestamp": millis}}}
        )
        cache = MappingCache(store, storage_key=STORAGE_KEY, clock=fixed_clock)

        entry = await cache.get("PRN")

        assert entry.timestamp == fixed_clock()


class TestCleanup:
    """Test MappingCache.cleanup."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_expiry_boundary(self, fixed_clock):
        """Test 31-day-old entries are removed and 29-day-old ones kept."""
        store = InMemoryKeyValueStore({STORAGE_KEY: _blob(fixed_clock(), Old=31, Recent=29)})
        cache = MappingCache(store, storage_key=STORAGE_KEY, retention_days=30, clock=fixed_clock)

        removed = await cache.cleanup()

        assert removed == 1
        assert await cache.get("Old") is None
        assert await cache.get("Recent") is not None
        assert set(await store.get(STORAGE_KEY)) == {"Recent"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_idempotent(self, fixed_clock):
        """Test a second sweep removes nothing and writes nothing."""
        store = CountingStore({STORAGE_KEY: _blob(fixed_clock(), Old=40, Recent=1)})
        cache = MappingCache(store, storage_key=STORAGE_KEY, clock=fixed_clock)

        assert await cache.cleanup() == 1
        assert await cache.cleanup() == 0
        assert store.writes == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_concurrent_with_store(self, mapping_cache):
        """Test cleanup and stores can interleave."""
        await asyncio.gather(
            mapping_cache.cleanup(),
            *(mapping_cache.store(f"Label {i}", "city", 0.8) for i in range(10)),
            mapping_cache.cleanup(),
        )

        assert len(mapping_cache) == 10


class TestCorruptionAndFailures:
    """Test the cache never breaks its callers."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failing_store(self):
        """Test storage errors become misses and no-ops."""
        cache = MappingCache(FailingStore(), storage_key=STORAGE_KEY)

        await cache.store("Email", "email", 0.9)
        assert await cache.cleanup() == 0
        await cache.clear()

        assert await cache.get("Unknown") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_read_does_not_overwrite_blob(self, fixed_clock):
        """Test a store made after a failed read leaves the stored map alone."""
        store = FlakyStore({STORAGE_KEY: _blob(fixed_clock(), Email=1)})
        cache = MappingCache(store, storage_key=STORAGE_KEY, clock=fixed_clock)

        await cache.store("City", "city", 0.8)

        assert store.writes == 0
        assert set(await store.get(STORAGE_KEY)) == {"Email"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_read_retried_after_failure(self, fixed_clock):
        """Test stored and pending entries are merged once the read succeeds."""
        store = FlakyStore({STORAGE_KEY: _blob(fixed_clock(), Email=1, City=2)})
        cache = MappingCache(store, storage_key=STORAGE_KEY, clock=fixed_clock)

        await cache.store("City", "branch", 0.7)
        assert (await cache.get("Email")).field == "email"
        await cache.store("Branch", "branch", 0.9)

        blob = await store.get(STORAGE_KEY)
        assert set(blob) == {"Email", "City", "Branch"}
        assert blob["City"]["field"] == "branch"
        assert store.writes == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cleanup_after_failed_read_writes_nothing(self, fixed_clock):
        """Test cleanup does not persist while the stored map is unknown."""
        store = FlakyStore({STORAGE_KEY: _blob(fixed_clock(), Old=45)})
        cache = MappingCache(store, storage_key=STORAGE_KEY, clock=fixed_clock)

        assert await cache.cleanup() == 0
        assert store.writes == 0
        assert await cache.cleanup() == 1
        assert store.writes == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_entries_dropped(self, fixed_clock):
        """Test malformed entries are skipped, valid ones kept."""
        blob = _blob(fixed_clock(), Good=1)
        blob["Bad"] = {"field": "email"}
        blob["Worse"] = "not an entry"
        cache = MappingCache(InMemoryKeyValueStore({STORAGE_KEY: blob}), clock=fixed_clock)

        entries = await cache.load()

        assert set(entries) == {"Good"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_blob_not_a_mapping(self):
        """Test a garbage blob is treated as empty."""
        cache = MappingCache(InMemoryKeyValueStore({STORAGE_KEY: ["garbage"]}))

        assert await cache.load() == {}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_clear(self, mapping_cache, memory_store):
        """Test clear removes the storage slot."""
        await mapping_cache.store("City", "city", 0.8)

        await mapping_cache.clear()

        assert await memory_store.get(STORAGE_KEY) is None
        assert await mapping_cache.get("City") is None


class TestJsonFileStore:
    """Test JsonFileKeyValueStore."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_set_get_remove(self, tmp_path):
        """Test values survive a new store instance."""
        path = tmp_path / "cache" / "store.json"
        await JsonFileKeyValueStore(path).set("slot", {"a": 1})

        reopened = JsonFileKeyValueStore(path)
        assert await reopened.get("slot") == {"a": 1}

        await reopened.remove("slot")
        assert await reopened.get("slot") is None
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        """Test a missing file reads as empty."""
        assert await JsonFileKeyValueStore(tmp_path / "absent.json").get("slot") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cache_over_file(self, tmp_path, fixed_clock):
        """Test the mapping cache persists through the file store."""
        path = tmp_path / "mapping.json"
        await MappingCache(JsonFileKeyValueStore(path), clock=fixed_clock).store("Branch", "branch", 0.9)

        entry = await MappingCache(JsonFileKeyValueStore(path), clock=fixed_clock).get("Branch")

        assert entry.field == "branch"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_corrupt_file(self, tmp_path):
        """Test an unreadable file is a cache miss."""
        path = tmp_path / "mapping.json"
        path.write_text("{not json", encoding="utf-8")

        assert await MappingCache(JsonFileKeyValueStore(path)).get("Branch") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_corrupt_file_not_overwritten(self, tmp_path, fixed_clock):
        """Test a file that cannot be parsed is left for inspection."""
        path = tmp_path / "mapping.json"
        path.write_text("{not json", encoding="utf-8")
        cache = MappingCache(JsonFileKeyValueStore(path), clock=fixed_clock)

        await cache.store("Branch", "branch", 0.9)

        assert path.read_text(encoding="utf-8") == "{not json"
        assert (await cache.get("Branch")).field == "branch"

    @pytest.mark.unit
    def test_from_config(self, mock_settings, tmp_path):
        """Test the file path comes from settings."""
        mock_settings.cache_file_path = str(tmp_path / "configured.json")

        with patch("field_matcher.cache.storage.settings", mock_settings):
            store = JsonFileKeyValueStore.from_config()

        assert store.path == tmp_path / "configured.json"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_from_config_round_trip(self, mock_settings, tmp_path, fixed_clock):
        """Test a cache over the configured file is readable by a new store."""
        mock_settings.cache_file_path = str(tmp_path / "data" / "mapping.json")

        with patch("field_matcher.cache.storage.settings", mock_settings):
            first = JsonFileKeyValueStore.from_config()
            second = JsonFileKeyValueStore.from_config()
        await MappingCache(first, clock=fixed_clock).store("Gender", "gender", 0.9)

        assert (await MappingCache(second, clock=fixed_clock).get("Gender")).field == "gender"
