"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Factory helpers for wiring a request cache from settings.
"""

from __future__ import annotations

from collections.abc import Callable

from .metrics import CacheMetrics, NoOpCacheMetrics, PrometheusCacheMetrics
from .request_cache import RequestCache
from .runtime.sweeper import CacheSweeper
from .settings import RequestCacheSettings


def create_cache_metrics(settings: RequestCacheSettings) -> CacheMetrics:
    """Resolve the metrics sink named by `settings.metrics_backend`."""
    if settings.metrics_backend == "prometheus":
        return PrometheusCacheMetrics(namespace=settings.metrics_namespace)
    return NoOpCacheMetrics()


def create_request_cache(
    settings: RequestCacheSettings | None = None,
    *,
    metrics: CacheMetrics | None = None,
    clock: Callable[[], float] | None = None,
) -> RequestCache:
    """
    Build a `RequestCache` from explicit settings.

    An injected `metrics` sink takes precedence over `settings.metrics_backend`.
    """
    resolved = settings or RequestCacheSettings()
    return RequestCache(
        default_ttl_s=resolved.default_ttl_s,
        clock=clock,
        metrics=metrics or create_cache_metrics(resolved),
    )


def create_request_cache_from_env(
    *,
    metrics: CacheMetrics | None = None,
    clock: Callable[[], float] | None = None,
) -> RequestCache:
    """Build a `RequestCache` from `REQOPT_*` environment variables."""
    return create_request_cache(
        RequestCacheSettings.from_env(),
        metrics=metrics,
        clock=clock,
    )


def create_sweeper(
    cache: RequestCache,
    settings: RequestCacheSettings | None = None,
) -> CacheSweeper | None:
    """Return a sweeper when `sweep_interval_s` is configured, else `None`."""
    resolved = settings or RequestCacheSettings()
    if resolved.sweep_interval_s is None:
        return None
    return CacheSweeper(cache, interval_s=resolved.sweep_interval_s)
