# Mapping cache module

from .mapping_cache import CACHE_FORMAT_VERSION, MappingCache, cache_key
from .storage import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore

__all__ = [
    "CACHE_FORMAT_VERSION",
    "MappingCache",
    "cache_key",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
