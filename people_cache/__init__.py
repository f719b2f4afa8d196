"""
people-cache - cache-aside reads over PostgreSQL plus a load-test harness.

This package provides:

- A keyed TTL cache with single-flight fills
- A cache-aside reader for the `person` table
- Transactional bulk generation of synthetic people
- A FastAPI endpoint exposing the cached data
- An asyncio/httpx harness that drives that endpoint with many clients
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from people_cache.cache import ALL_PEOPLE_KEY, CacheEntry, MemoryCache, PeopleReader
from people_cache.config import Settings, get_settings
from people_cache.domain import Person, RequestOutcome
from people_cache.generator import BulkGenerator
from people_cache.infrastructure import PostgresStoreClient, StoreClient
from people_cache.load import LoadHarness, LoadTestConfig, LoadTestReport
from people_cache.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Person",
    "RequestOutcome",
    # Store
    "PostgresStoreClient",
    "StoreClient",
    # Cache
    "ALL_PEOPLE_KEY",
    "CacheEntry",
    "MemoryCache",
    "PeopleReader",
    # Generation
    "BulkGenerator",
    # Load testing
    "LoadHarness",
    "LoadTestConfig",
    "LoadTestReport",
    # Logging
    "configure_logging",
    "get_logger",
]
