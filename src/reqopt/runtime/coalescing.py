"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/coalescing.py.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, TypeVar

from ..metrics import (
    CACHE_COALESCED,
    CACHE_FETCH_FAILURES,
    CacheMetrics,
    NoOpCacheMetrics,
)

T = TypeVar("T")


class RequestCoalescer:
    """
    Deduplicate identical in-flight requests.

    The pending slot for a key is claimed synchronously, before the first
    suspension point, and released by a done-callback on the shared future.
    Callbacks run in registration order, so the slot is free again before any
    waiter observes the outcome.
    """

    def __init__(self, *, metrics: CacheMetrics | None = None) -> None:
        self._pending: dict[str, asyncio.Future[Any]] = {}
        self._metrics: CacheMetrics = metrics or NoOpCacheMetrics()

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        existing = self._pending.get(key)
        if existing is not None:
            self._metrics.incr(CACHE_COALESCED)
            return await asyncio.shield(existing)

        future: asyncio.Future[T] = asyncio.ensure_future(factory())
        self._pending[key] = future
        future.add_done_callback(partial(self._release, key))
        # Shielded so a cancelled waiter never cancels the fetch for the others.
        return await asyncio.shield(future)

    def _release(self, key: str, future: asyncio.Future[Any]) -> None:
        if self._pending.get(key) is future:
            del self._pending[key]
        if future.cancelled():
            return
        # Also marks the exception retrieved when every waiter has gone away.
        if future.exception() is not None:
            self._metrics.incr(CACHE_FETCH_FAILURES)

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._pending)
