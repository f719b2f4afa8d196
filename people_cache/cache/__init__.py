"""
Cache package for people-cache.

Re-exports the TTL cache and the cache-aside reader built on it.
"""

from people_cache.cache.memory import CacheEntry, MemoryCache
from people_cache.cache.reader import ALL_PEOPLE_KEY, PeopleReader, log_fetch

__all__ = [
    "ALL_PEOPLE_KEY",
    "CacheEntry",
    "MemoryCache",
    "PeopleReader",
    "log_fetch",
]
