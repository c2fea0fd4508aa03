"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Process-local request cache with in-flight de-duplication.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .cache import CacheEntry, CacheStats, InMemoryCacheTable
from .errors import InvalidCacheKeyError, InvalidTTLError
from .metrics import (
    CACHE_CLEARS,
    CACHE_HITS,
    CACHE_INVALIDATIONS,
    CACHE_MISSES,
    CACHE_PURGED,
    CacheMetrics,
    NoOpCacheMetrics,
)
from .runtime.coalescing import RequestCoalescer

T = TypeVar("T")

logger = logging.getLogger("reqopt.cache")

DEFAULT_TTL_S = 5.0


def validate_key(key: object) -> str:
    if not isinstance(key, str) or not key:
        raise InvalidCacheKeyError(f"Cache key must be a non-empty string, got {key!r}")
    return key


def validate_ttl(ttl_s: object) -> float:
    if isinstance(ttl_s, bool) or not isinstance(ttl_s, (int, float)):
        raise InvalidTTLError(f"TTL must be a number of seconds, got {ttl_s!r}")
    value = float(ttl_s)
    if math.isnan(value) or value < 0:
        raise InvalidTTLError(f"TTL must be non-negative, got {ttl_s!r}")
    return value


class RequestCache:
    """
    Cache-plus-deduplication layer between call sites and async fetches.

    Identical concurrent requests share one underlying fetch, and completed
    results are reused for `ttl_s` seconds. Construct one instance per process
    and inject it into call sites; both tables are owned by the instance.

    Failures are never cached. Retry policy belongs to the fetch callable
    (see `reqopt.runtime.retry.retrying`).
    """

    def __init__(
        self,
        *,
        default_ttl_s: float = DEFAULT_TTL_S,
        clock: Callable[[], float] | None = None,
        metrics: CacheMetrics | None = None,
    ) -> None:
        self._default_ttl_s = validate_ttl(default_ttl_s)
        self._clock = clock or time.monotonic
        self._metrics: CacheMetrics = metrics or NoOpCacheMetrics()
        self._table = InMemoryCacheTable()
        self._coalescer = RequestCoalescer(metrics=self._metrics)

    @property
    def default_ttl_s(self) -> float:
        return self._default_ttl_s

    async def deduplicate(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        """
        Run `fetch` unless a fetch for `key` is already in flight.

        Concurrent callers with the same key await the same future and
        observe the same value or exception.
        """
        validate_key(key)
        return await self._coalescer.run(key, fetch)

    async def with_cache(
        self,
        key: str,
        fetch: Callable[[], Awaitable[T]],
        ttl_s: float | None = None,
    ) -> T:
        """
        Return a fresh cached value for `key`, fetching on miss or expiry.

        Misses go through `deduplicate`, so concurrent misses for one key
        still collapse into a single fetch.
        """
        validate_key(key)
        ttl = self._default_ttl_s if ttl_s is None else validate_ttl(ttl_s)

        cached = self._table.get_fresh(key, self._clock())
        if cached is not None:
            self._metrics.incr(CACHE_HITS)
            logger.debug("Cache HIT %s", key)
            return cached.value

        self._metrics.incr(CACHE_MISSES)
        logger.debug("Cache MISS %s", key)
        value = await self.deduplicate(key, fetch)

        now = self._clock()
        self._table.put(key, CacheEntry(value=value, created_at_s=now, expires_at_s=now + ttl))
        return value

    def invalidate(self, key: str) -> None:
        """Drop the cached entry for `key`; in-flight fetches are untouched."""
        if self._table.delete(key):
            self._metrics.incr(CACHE_INVALIDATIONS)
        logger.debug("Cache INVALIDATE %s", key)

    def clear_cache(self) -> None:
        """Drop every cached entry; in-flight fetches still repopulate on settle."""
        removed = self._table.clear()
        self._metrics.incr(CACHE_CLEARS)
        logger.debug("Cache CLEAR (%d entries)", removed)

    def purge_expired(self) -> int:
        """Remove expired entries and return how many were dropped."""
        removed = self._table.purge_expired(self._clock())
        if removed:
            self._metrics.incr(CACHE_PURGED, removed)
            logger.debug("Cache PURGE (%d expired entries)", removed)
        return removed

    def get_cache_stats(self) -> CacheStats:
        keys = self._table.keys()
        return CacheStats(size=len(keys), keys=keys, pending=len(self._coalescer))

    def pending_keys(self) -> tuple[str, ...]:
        return self._coalescer.pending_keys()
