"""
In-process TTL cache with single-flight fills.

`MemoryCache` is owned explicitly: the service creates one at startup, injects
it into readers, and clears it at shutdown. Entries expire passively, so there
is no background eviction thread; staleness is detected on the next lookup.

Concurrent misses on the same key collapse into one call of the factory. The
first caller installs a future in the in-flight registry and runs the factory
outside the lock; later callers block on that future and share its result or
its exception. Failures are never cached.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached value stamped with its creation time.

    The entry is valid while `now < created_at + ttl_seconds`.
    """

    value: Any
    created_at: float
    ttl_seconds: float

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl_seconds

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class MemoryCache:
    """
    Keyed TTL cache with at-most-one concurrent fill per key.

    Parameters
    ----------
    clock : callable
        Monotonic time source in seconds. Tests inject a fake clock.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, CacheEntry] = {}
        self._inflight: Dict[str, Future] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for `key`, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is not None and entry.is_valid(self._clock()):
            return entry.value
        return None

    def get_or_create(self, key: str, factory: Callable[[], Any], ttl_seconds: float) -> Any:
        """
        Return the valid cached value for `key`, filling it with `factory` on a miss.

        Parameters
        ----------
        key : str
            Cache key.
        factory : callable
            Zero-argument callable producing the value. Runs at most once
            concurrently per key; its exception propagates to every caller
            waiting on that fill.
        ttl_seconds : float
            Lifetime of the new entry, counted from when the fill completes.
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        # Valid entries are served without taking the lock.
        entry = self._entries.get(key)
        if entry is not None and entry.is_valid(self._clock()):
            return entry.value

        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_valid(self._clock()):
                return entry.value
            pending = self._inflight.get(key)
            if pending is None:
                leader = Future()
                self._inflight[key] = leader
                self._entries.pop(key, None)

        if pending is not None:
            return pending.result()

        try:
            value = factory()
        except BaseException as exc:
            with self._lock:
                del self._inflight[key]
            leader.set_exception(exc)
            raise

        with self._lock:
            self._entries[key] = CacheEntry(
                value=value, created_at=self._clock(), ttl_seconds=ttl_seconds
            )
            del self._inflight[key]
        leader.set_result(value)
        return value

    def invalidate(self, key: str) -> None:
        """Drop the entry for `key`. A fill already in flight is unaffected."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every entry. Called at service shutdown."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for entry in list(self._entries.values()) if entry.is_valid(now))


__all__ = ["CacheEntry", "MemoryCache"]
