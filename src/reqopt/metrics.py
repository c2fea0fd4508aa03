"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Metrics sinks for request cache observability.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .errors import RequestCacheConfigError

CACHE_HITS = "request_cache_hits_total"
CACHE_MISSES = "request_cache_misses_total"
CACHE_COALESCED = "request_cache_coalesced_total"
CACHE_FETCH_FAILURES = "request_cache_fetch_failures_total"
CACHE_INVALIDATIONS = "request_cache_invalidations_total"
CACHE_CLEARS = "request_cache_clears_total"
CACHE_PURGED = "request_cache_purged_total"

METRIC_DESCRIPTIONS: dict[str, str] = {
    CACHE_HITS: "Reads served from a fresh cache entry without fetching.",
    CACHE_MISSES: "Reads that found no fresh entry and went to the fetch path.",
    CACHE_COALESCED: "Callers attached to a fetch already in flight for the same key.",
    CACHE_FETCH_FAILURES: "Fetches that settled with an exception, counted once per fetch.",
    CACHE_INVALIDATIONS: "Cached entries removed by explicit invalidation.",
    CACHE_CLEARS: "Full cache clears.",
    CACHE_PURGED: "Expired entries removed by purge or background sweep.",
}


class CacheMetrics(Protocol):
    """Minimal metrics interface for request cache instrumentation."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        """Increment a counter metric."""


class NoOpCacheMetrics:
    """Default metrics sink when no metrics backend is provided."""

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        _ = name
        _ = value
        _ = tags


class PrometheusCacheMetrics:
    """
    Prometheus-backed cache metrics adapter.

    Requires `prometheus_client` package. Counters are registered lazily on
    first increment; pass `registry` to keep them out of the global default
    registry.
    """

    def __init__(self, *, namespace: str = "reqopt", registry: Any | None = None) -> None:
        try:
            from prometheus_client import Counter
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise RequestCacheConfigError(
                "PrometheusCacheMetrics requires `prometheus_client` to be installed."
            ) from exc

        self._Counter = Counter
        self._namespace = namespace
        self._registry = registry
        self._counters: dict[str, Any] = {}

    def incr(
        self, name: str, value: int = 1, *, tags: Mapping[str, str] | None = None
    ) -> None:
        label_names = tuple(sorted((tags or {}).keys()))
        key = f"{name}|{','.join(label_names)}"
        counter = self._counters.get(key)
        if counter is None:
            kwargs: dict[str, Any] = {}
            if self._registry is not None:
                kwargs["registry"] = self._registry
            counter = self._Counter(
                name=name,
                documentation=METRIC_DESCRIPTIONS.get(name, f"Request cache counter {name}."),
                namespace=self._namespace,
                labelnames=label_names,
                **kwargs,
            )
            self._counters[key] = counter

        if label_names:
            label_values = [str((tags or {})[label]) for label in label_names]
            counter.labels(*label_values).inc(value)
        else:
            counter.inc(value)
