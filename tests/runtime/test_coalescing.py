from __future__ import annotations

import asyncio

import pytest

from reqopt import RequestCoalescer


def run_async(coro):
    return asyncio.run(coro)


def test_different_keys_do_not_share_fetches():
    async def scenario() -> None:
        coalescer = RequestCoalescer()
        calls: list[str] = []

        def make(name: str):
            async def _fetch():
                calls.append(name)
                await asyncio.sleep(0)
                return name

            return _fetch

        results = await asyncio.gather(
            coalescer.run("a", make("a")),
            coalescer.run("b", make("b")),
            coalescer.run("a", make("a-dup")),
        )
        assert results == ["a", "b", "a"]
        assert sorted(calls) == ["a", "b"]
        assert len(coalescer) == 0

    run_async(scenario())


def test_factory_is_invoked_before_first_suspension():
    async def scenario() -> None:
        coalescer = RequestCoalescer()
        invoked: list[bool] = []

        def factory():
            invoked.append(True)

            async def _value():
                return 7

            return _value()

        waiter = asyncio.create_task(coalescer.run("k", factory))
        await asyncio.sleep(0)
        assert invoked == [True]
        assert coalescer.is_pending("k")
        assert await waiter == 7
        assert not coalescer.is_pending("k")

    run_async(scenario())


def test_factory_raising_synchronously_leaves_no_pending_slot():
    async def scenario() -> None:
        coalescer = RequestCoalescer()

        def factory():
            raise RuntimeError("could not build request")

        with pytest.raises(RuntimeError, match="could not build request"):
            await coalescer.run("k", factory)
        assert coalescer.pending_keys() == ()

    run_async(scenario())


def test_slot_released_when_fetch_is_cancelled_from_inside():
    async def scenario() -> None:
        coalescer = RequestCoalescer()

        async def fetch():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await coalescer.run("k", fetch)
        await asyncio.sleep(0)
        assert coalescer.pending_keys() == ()

    run_async(scenario())


def test_waiter_counts_as_coalesced():
    class _Metrics:
        def __init__(self) -> None:
            self.counts: dict[str, int] = {}

        def incr(self, name, value=1, *, tags=None):
            _ = tags
            self.counts[name] = self.counts.get(name, 0) + value

    async def scenario() -> None:
        metrics = _Metrics()
        coalescer = RequestCoalescer(metrics=metrics)
        gate = asyncio.Event()

        async def fetch():
            await gate.wait()
            return "ok"

        waiters = [asyncio.create_task(coalescer.run("k", fetch)) for _ in range(3)]
        await asyncio.sleep(0)
        gate.set()
        assert await asyncio.gather(*waiters) == ["ok", "ok", "ok"]
        assert metrics.counts == {"request_cache_coalesced_total": 2}

    run_async(scenario())
