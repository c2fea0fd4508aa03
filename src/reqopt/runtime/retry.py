"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/retry.py.

Retry belongs to the caller's fetch, not to the cache: wrap a fetch with
`retrying(...)` before handing it to `RequestCache.with_cache`.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .contracts import RetryPolicy

T = TypeVar("T")

logger = logging.getLogger("reqopt.runtime.retry")

ShouldRetry = Callable[[BaseException], bool]


def is_transient_error(error: BaseException) -> bool:
    """Default classifier: network and timeout failures are worth retrying."""
    return isinstance(
        error,
        (asyncio.TimeoutError, TimeoutError, socket.timeout, ConnectionError, OSError),
    )


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy,
    should_retry: ShouldRetry | None = None,
) -> T:
    """Execute callable under bounded retry policy."""
    classify = should_retry or is_transient_error
    retries = max(0, policy.max_retries)
    attempt = 0
    while True:
        try:
            return await fn()
        except Exception as error:
            if attempt >= retries or not classify(error):
                raise
            delay = policy.delay_for(attempt)
            attempt += 1
            logger.info(
                "Retry attempt %d/%d after %.3fs: %s",
                attempt,
                retries,
                delay,
                error,
            )
            await asyncio.sleep(delay)


def retrying(
    fn: Callable[[], Awaitable[T]],
    *,
    policy: RetryPolicy | None = None,
    should_retry: ShouldRetry | None = None,
) -> Callable[[], Awaitable[T]]:
    """Bind `fn` to a retry policy, yielding a zero-argument fetch callable."""
    resolved = policy or RetryPolicy()

    async def _fetch() -> T:
        return await call_with_retry(fn, policy=resolved, should_retry=should_retry)

    return _fetch
