"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Background sweep of expired cache entries.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

logger = logging.getLogger("reqopt.runtime.sweeper")


class Purgeable(Protocol):
    def purge_expired(self) -> int: ...


class CacheSweeper:
    """
    Periodically purge expired entries from a cache.

    Lookups already ignore expired entries; the sweeper only bounds memory
    for long-lived processes with high key cardinality.
    """

    def __init__(self, cache: Purgeable, *, interval_s: float) -> None:
        if not interval_s > 0:
            raise ValueError("interval_s must be positive")
        self._cache = cache
        self._interval_s = float(interval_s)
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        """Whether the sweep loop is active."""
        return self._task is not None and not self._task.done()

    @property
    def interval_s(self) -> float:
        return self._interval_s

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("CacheSweeper started (interval_s=%.3f)", self._interval_s)

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to exit."""
        task = self._task
        self._task = None
        if task is None:
            return
        if not task.done():
            task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.info("CacheSweeper stopped")

    def sweep_once(self) -> int:
        return self._cache.purge_expired()

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_s)
            try:
                removed = self.sweep_once()
            except Exception:
                logger.exception("Cache sweep failed")
                continue
            if removed:
                logger.debug("Cache sweep removed %d expired entries", removed)

    async def __aenter__(self) -> "CacheSweeper":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()
