"""
Key/value storage backends for the mapping cache.

The cache keeps all of its entries in one blob under a single slot key, so a
backend only needs async get/set/remove of JSON-compatible values. Backends
may raise on any call; the cache treats every failure as a miss.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog

from ..config import settings


logger = structlog.get_logger(__name__)


class KeyValueStore(ABC):
    """Asynchronous key/value storage."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Value stored under key, or None."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Delete key; missing keys are ignored."""


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used in tests and short-lived sessions."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    async def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store backed by one JSON object on disk.

    File I/O runs in a worker thread; a lock serializes read-modify-write
    cycles of concurrent callers within the process.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls) -> "JsonFileKeyValueStore":
        """Store at settings.cache_file_path."""
        return cls(settings.cache_file_path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            data[key] = value
            await asyncio.to_thread(self._write, data)
        logger.debug("storage_file_written", path=str(self.path), key=key)

    async def remove(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            if key in data:
                del data[key]
                await asyncio.to_thread(self._write, data)
