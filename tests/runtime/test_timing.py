from __future__ import annotations

import asyncio
import logging

import pytest

from reqopt import debounce, throttle


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def run_async(coro):
    return asyncio.run(coro)


def test_debounce_runs_only_last_call_of_burst():
    async def scenario() -> None:
        calls: list[tuple] = []

        def save(*args):
            calls.append(args)

        debounced = debounce(save, 0.05)
        for index in range(1, 6):
            debounced(index, f"draft-{index}")
            await asyncio.sleep(0.005)
        assert calls == []
        assert debounced.pending

        await asyncio.sleep(0.15)
        assert calls == [(5, "draft-5")]
        assert not debounced.pending

    run_async(scenario())


def test_debounce_schedules_coroutine_functions():
    async def scenario() -> None:
        saved: list[str] = []

        async def save(value: str) -> None:
            await asyncio.sleep(0)
            saved.append(value)

        debounced = debounce(save, 0.01)
        debounced("first")
        debounced("second")
        await asyncio.sleep(0.1)
        assert saved == ["second"]

    run_async(scenario())


def test_debounce_cancel_drops_scheduled_call():
    async def scenario() -> None:
        calls: list[int] = []
        debounced = debounce(calls.append, 0.01)
        debounced(1)
        debounced.cancel()
        await asyncio.sleep(0.05)
        assert calls == []

    run_async(scenario())


def test_debounce_separate_bursts_each_fire():
    async def scenario() -> None:
        calls: list[int] = []
        debounced = debounce(calls.append, 0.01)
        debounced(1)
        await asyncio.sleep(0.05)
        debounced(2)
        await asyncio.sleep(0.05)
        assert calls == [1, 2]

    run_async(scenario())


def test_debounce_keeps_wrapped_metadata():
    def save_order():
        """Persist the order draft."""

    wrapped = debounce(save_order, 0.3)
    assert wrapped.__name__ == "save_order"
    assert wrapped.__doc__ == "Persist the order draft."


def test_throttle_drops_calls_inside_window():
    clock = _Clock()
    calls: list[int] = []
    throttled = throttle(calls.append, 1.0, clock=clock)

    for index in range(10):
        clock.now = index * 0.005
        throttled(index)
    assert calls == [0]

    clock.now = 1.001
    throttled(10)
    assert calls == [0, 10]


def test_throttle_window_restarts_from_last_allowed_call():
    clock = _Clock()
    calls: list[str] = []
    throttled = throttle(calls.append, 1.0, clock=clock)

    throttled("a")
    clock.now = 1.5
    throttled("b")
    clock.now = 2.2
    throttled("c")
    clock.now = 2.5
    throttled("d")
    assert calls == ["a", "b", "d"]


def test_throttle_returns_result_only_when_invoked():
    clock = _Clock()
    throttled = throttle(lambda value: value * 2, 1.0, clock=clock)
    assert throttled(21) == 42
    assert throttled(21) is None
    throttled.reset()
    assert throttled(4) == 8


@pytest.mark.parametrize("factory", [debounce, throttle])
def test_negative_wait_rejected(factory):
    with pytest.raises(ValueError, match="non-negative"):
        factory(lambda: None, -1)


@pytest.mark.parametrize("factory", [debounce, throttle])
def test_nan_wait_rejected(factory):
    with pytest.raises(ValueError, match="non-negative"):
        factory(lambda: None, float("nan"))


def test_debounced_failure_is_logged_and_later_calls_still_fire(caplog):
    async def scenario() -> None:
        calls: list[int] = []

        def save(value: int) -> None:
            if value == 1:
                raise RuntimeError("receipt store unavailable")
            calls.append(value)

        debounced = debounce(save, 0.01)
        debounced(1)
        await asyncio.sleep(0.05)
        debounced(2)
        await asyncio.sleep(0.05)
        assert calls == [2]

    with caplog.at_level(logging.ERROR, logger="reqopt.runtime.timing"):
        run_async(scenario())

    records = [r for r in caplog.records if r.name == "reqopt.runtime.timing"]
    assert len(records) == 1
    assert "Debounced call" in records[0].getMessage()
    assert isinstance(records[0].exc_info[1], RuntimeError)


def test_throttled_coroutine_outside_event_loop_raises():
    async def refresh() -> None:
        return None

    throttled = throttle(refresh, 1.0, clock=_Clock())
    with pytest.raises(RuntimeError, match="running event loop"):
        throttled()


def test_throttled_coroutine_inside_loop_returns_awaitable_task():
    async def scenario() -> None:
        async def refresh(value: int) -> int:
            return value + 1

        throttled = throttle(refresh, 1.0, clock=_Clock())
        assert await throttled(1) == 2
        assert throttled(5) is None

    run_async(scenario())
