"""
Cache-aside reader for the `person` table.

`PeopleReader.get_all()` serves the whole table from a `MemoryCache` entry and
falls back to the store when the entry is missing or expired. Every store fetch
is reported through the `on_fetch` hook so cache-miss frequency stays visible.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from people_cache.cache.memory import MemoryCache
from people_cache.config import get_settings
from people_cache.domain.models import Person
from people_cache.infrastructure.store import StoreClient
from people_cache.utils.logging import get_logger

log = get_logger(__name__)

ALL_PEOPLE_KEY = "AllPeople"
PERSON_TABLE = "person"
PERSON_COLUMNS = ("id", "name")

FetchHook = Callable[[datetime], None]


def log_fetch(fetched_at: datetime) -> None:
    """Default fetch hook: one info line per store hit."""
    log.info("Hitting store at %s", fetched_at.isoformat(), extra={"key": ALL_PEOPLE_KEY})


class PeopleReader:
    """
    Read every Person through a TTL cache with single-flight fills.

    Parameters
    ----------
    store : StoreClient
        Authoritative source of rows.
    cache : MemoryCache
        Cache owned by the caller (typically the service lifespan).
    ttl_seconds : float | None
        Entry lifetime. Defaults to settings.cache_ttl_seconds.
    on_fetch : callable | None
        Observability hook invoked with the local time of each store fetch.
        Defaults to `log_fetch`.
    """

    def __init__(
        self,
        store: StoreClient,
        cache: MemoryCache,
        ttl_seconds: Optional[float] = None,
        on_fetch: Optional[FetchHook] = None,
    ) -> None:
        self._store = store
        self._cache = cache
        if ttl_seconds is None:
            ttl_seconds = get_settings().cache_ttl_seconds
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._on_fetch = on_fetch or log_fetch

    def get_all(self) -> tuple[Person, ...]:
        """
        Return every Person, hitting the store only when the cache entry is stale.

        Store errors propagate; nothing is cached for a failed fetch.
        """
        return self._cache.get_or_create(ALL_PEOPLE_KEY, self._fetch, self.ttl_seconds)

    def invalidate(self) -> None:
        """Force the next `get_all()` to fetch from the store."""
        self._cache.invalidate(ALL_PEOPLE_KEY)

    def _fetch(self) -> tuple[Person, ...]:
        self._on_fetch(datetime.now())
        rows = self._store.query_all(PERSON_TABLE, PERSON_COLUMNS, order_by="id")
        return tuple(Person(id=row_id, name=name) for row_id, name in rows)


__all__ = ["ALL_PEOPLE_KEY", "PeopleReader", "log_fetch"]
