"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Debounce and throttle wrappers for UI-style call sites.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger("reqopt.runtime.timing")

_background: set[asyncio.Future[Any]] = set()


def _log_background_failure(future: asyncio.Future[Any]) -> None:
    _background.discard(future)
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error("Scheduled call failed: %r", error, exc_info=error)


def _dispatch(result: Any) -> Any:
    """Run coroutine results as tasks so the caller does not have to await them."""
    if not inspect.isawaitable(result):
        return result
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(result):
            result.close()
        raise RuntimeError(
            "Coroutine functions can only be throttled or debounced inside a running event loop"
        ) from None
    future = asyncio.ensure_future(result, loop=loop)
    _background.add(future)
    future.add_done_callback(_log_background_failure)
    return future


class Debounced:
    """
    Wrapper returned by `debounce`.

    Every call cancels the scheduled invocation (if any) and schedules a new
    one `wait_s` seconds later with the latest arguments. Must be called from
    within a running event loop.
    """

    def __init__(self, fn: Callable[..., Any], wait_s: float) -> None:
        if not wait_s >= 0:
            raise ValueError("wait_s must be non-negative")
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._wait_s = float(wait_s)
        self._handle: asyncio.TimerHandle | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self._wait_s, self._fire, args, kwargs)

    def _fire(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._handle = None
        try:
            _dispatch(self._fn(*args, **kwargs))
        except Exception:
            logger.exception(
                "Debounced call to %s failed",
                getattr(self._fn, "__qualname__", self._fn),
            )

    @property
    def pending(self) -> bool:
        """Whether an invocation is scheduled and has not run yet."""
        return self._handle is not None

    def cancel(self) -> None:
        """Drop the scheduled invocation without running it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class Throttled:
    """
    Wrapper returned by `throttle`.

    The first call runs immediately and opens a window of `wait_s` seconds;
    calls inside the window are dropped, not queued.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        wait_s: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not wait_s >= 0:
            raise ValueError("wait_s must be non-negative")
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._wait_s = float(wait_s)
        self._clock = clock
        self._window_started_s: float | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        now = self._clock()
        if (
            self._window_started_s is not None
            and now - self._window_started_s < self._wait_s
        ):
            return None
        self._window_started_s = now
        return _dispatch(self._fn(*args, **kwargs))

    def reset(self) -> None:
        """Close the current window so the next call runs immediately."""
        self._window_started_s = None


def debounce(fn: Callable[..., Any], wait_s: float) -> Debounced:
    """Run `fn` only after calls stop arriving for `wait_s` seconds."""
    return Debounced(fn, wait_s)


def throttle(
    fn: Callable[..., Any],
    wait_s: float,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> Throttled:
    """Run `fn` at most once per `wait_s` seconds, dropping the rest."""
    return Throttled(fn, wait_s, clock=clock)
