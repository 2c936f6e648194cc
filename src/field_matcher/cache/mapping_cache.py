"""
Label -> field mapping cache.

Remembers which FieldId a label was filled as, with the classifier
confidence at the time, so later passes can reuse a stronger earlier decision.

Storage layout: one blob under ``settings.cache_storage_key``:
    {"<trimmed raw label>": {"field": ..., "confidence": ..., "timestamp": ...}}

The cache is never a correctness dependency. Every storage failure is logged
and handled as a miss (reads) or a no-op (writes). Until a read succeeds the
cache works from memory only and never writes, so a store that is briefly
unreadable cannot have its blob overwritten. A blob read successfully but
holding no mapping is treated as empty and replaced by the next write.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import structlog
from pydantic import ValidationError

from ..config import settings
from ..models.cache import CacheEntry
from ..version import CACHE_FORMAT_VERSION
from .storage import KeyValueStore


logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def cache_key(label: str) -> str:
    """Cache key of a label: the raw label with outer whitespace removed."""
    return (label or "").strip()


class MappingCache:
    """
    Persistent label -> (field, confidence, timestamp) cache.

    Entries are loaded lazily on first use and kept in memory; every mutation
    writes the whole map back to the store. Concurrent writers race and the
    last write wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: Optional[str] = None,
        retention_days: Optional[int] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._store = store
        self.storage_key = storage_key or settings.cache_storage_key
        self.retention = timedelta(
            days=retention_days if retention_days is not None else settings.cache_retention_days
        )
        self.clock = clock

        self._entries: Dict[str, CacheEntry] = {}
        self._loaded = False
        self._lock = asyncio.Lock()

        self.logger = logger.bind(component="mapping_cache", storage_key=self.storage_key)

    def __len__(self) -> int:
        return len(self._entries)

    async def load(self) -> Dict[str, CacheEntry]:
        """
        Read the stored map, once it can be read.

        A failed read is retried on the next call. Entries stored in the
        meantime are kept and take precedence over the stored ones.

        Returns:
            Copy of the known entries
        """
        if self._loaded:
            return dict(self._entries)

        try:
            blob = await self._store.get(self.storage_key)
        except Exception as e:
            self.logger.warning("cache_read_failed", error=str(e), error_type=type(e).__name__)
            return dict(self._entries)

        self._entries = {**self._parse(blob), **self._entries}
        self._loaded = True

        self.logger.debug(
            "cache_loaded",
            entries=len(self._entries),
            cache_format_version=CACHE_FORMAT_VERSION,
        )
        return dict(self._entries)

    def _parse(self, blob: Any) -> Dict[str, CacheEntry]:
        if blob is None:
            return {}
        if not isinstance(blob, dict):
            self.logger.warning("cache_blob_invalid", blob_type=type(blob).__name__)
            return {}

        entries = {}
        for label, raw_entry in blob.items():
            try:
                entries[label] = CacheEntry.model_validate(raw_entry)
            except ValidationError as e:
                self.logger.warning("cache_entry_dropped", label=label, error=str(e))
        return entries

    async def _persist(self) -> None:
        if not self._loaded:
            self.logger.debug("cache_write_deferred", entries=len(self._entries))
            return
        blob = {label: entry.model_dump(mode="json") for label, entry in self._entries.items()}
        try:
            await self._store.set(self.storage_key, blob)
        except Exception as e:
            self.logger.warning("cache_write_failed", error=str(e), error_type=type(e).__name__)

    async def get(self, label: str) -> Optional[CacheEntry]:
        """
        Look up a label.

        Args:
            label: Raw label; only outer whitespace is ignored

        Returns:
            CacheEntry or None
        """
        await self.load()
        return self._entries.get(cache_key(label))

    async def store(self, label: str, field_id: str, confidence: float) -> None:
        """
        Remember a label -> field association, stamped with the current time.

        Overwrites any entry for the same key. Empty labels are ignored. The
        entry is only kept in memory while the stored map cannot be read.
        """
        key = cache_key(label)
        if not key:
            return

        async with self._lock:
            await self.load()
            self._entries[key] = CacheEntry(
                field=field_id,
                confidence=min(max(confidence, 0.0), 1.0),
                timestamp=self.clock(),
            )
            await self._persist()

    async def cleanup(self) -> int:
        """
        Drop entries older than the retention window.

        Idempotent; storage is only written when something was removed.

        Returns:
            Number of entries removed
        """
        async with self._lock:
            await self.load()
            cutoff = self.clock() - self.retention
            expired = [label for label, e in self._entries.items() if e.timestamp < cutoff]
            for label in expired:
                del self._entries[label]

            if expired:
                await self._persist()
                self.logger.info("cache_cleaned", removed=len(expired), remaining=len(self._entries))

        return len(expired)

    async def clear(self) -> None:
        """Forget every entry and remove the storage slot."""
        async with self._lock:
            self._entries = {}
            try:
                await self._store.remove(self.storage_key)
            except Exception as e:
                self.logger.warning("cache_write_failed", error=str(e), error_type=type(e).__name__)
                return
            self._loaded = True
