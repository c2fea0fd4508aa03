"""
table_status_panel.py: Cached table listing for a POS front-of-house screen.

Several widgets ask for the same table list at once; the cache collapses them
into one backend call, serves repeats for a few seconds, and is invalidated
when a table changes status.

Usage:
    export REQOPT_CACHE_TTL_S=5
    python examples/table_status_panel.py
"""

import asyncio
import logging

from reqopt import (
    RetryPolicy,
    create_request_cache_from_env,
    debounce,
    request_key,
    retrying,
)

backend_calls = 0
tables = {"t1": "available", "t2": "occupied", "t3": "reserved"}


async def fetch_tables(status: str | None = None) -> list[dict[str, str]]:
    global backend_calls
    backend_calls += 1
    await asyncio.sleep(0.05)
    return [
        {"id": table_id, "status": value}
        for table_id, value in tables.items()
        if status is None or value == status
    ]


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s")
    cache = create_request_cache_from_env()
    key = request_key("/tables", {"status": "available"})
    fetch = retrying(lambda: fetch_tables("available"), policy=RetryPolicy(max_retries=2))

    widgets = await asyncio.gather(*(cache.with_cache(key, fetch) for _ in range(4)))
    print("widgets:", widgets[0], "backend calls:", backend_calls)

    async def mark_occupied(table_id: str) -> None:
        tables[table_id] = "occupied"
        cache.invalidate(key)

    save = debounce(mark_occupied, 0.1)
    for _ in range(3):
        save("t1")
    await asyncio.sleep(0.2)

    print("after update:", await cache.with_cache(key, fetch), "backend calls:", backend_calls)
    print("stats:", cache.get_cache_stats())


if __name__ == "__main__":
    asyncio.run(main())
