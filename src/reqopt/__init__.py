"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Request optimization for async data-fetch call sites.

Quick start::

    from reqopt import RequestCache, request_key

    cache = RequestCache(default_ttl_s=5.0)
    tables = await cache.with_cache(
        request_key("/tables", {"status": "available"}),
        lambda: api.get_tables(status="available"),
    )
    cache.invalidate(request_key("/tables", {"status": "available"}))
"""

from .cache import CacheEntry, CacheStats, InMemoryCacheTable
from .errors import (
    InvalidCacheKeyError,
    InvalidTTLError,
    RequestCacheConfigError,
    RequestCacheError,
)
from .factory import (
    create_cache_metrics,
    create_request_cache,
    create_request_cache_from_env,
    create_sweeper,
)
from .keys import request_key
from .metrics import CacheMetrics, NoOpCacheMetrics, PrometheusCacheMetrics
from .request_cache import DEFAULT_TTL_S, RequestCache
from .runtime import (
    CacheSweeper,
    Debounced,
    RequestCoalescer,
    RetryPolicy,
    Throttled,
    call_with_retry,
    debounce,
    is_transient_error,
    retrying,
    throttle,
)
from .settings import RequestCacheSettings

__all__ = [
    "RequestCache",
    "DEFAULT_TTL_S",
    "CacheEntry",
    "CacheStats",
    "InMemoryCacheTable",
    "RequestCoalescer",
    "CacheSweeper",
    "RequestCacheSettings",
    "create_request_cache",
    "create_request_cache_from_env",
    "create_cache_metrics",
    "create_sweeper",
    "CacheMetrics",
    "NoOpCacheMetrics",
    "PrometheusCacheMetrics",
    "RetryPolicy",
    "call_with_retry",
    "is_transient_error",
    "retrying",
    "Debounced",
    "Throttled",
    "debounce",
    "throttle",
    "request_key",
    "RequestCacheError",
    "InvalidCacheKeyError",
    "InvalidTTLError",
    "RequestCacheConfigError",
]
