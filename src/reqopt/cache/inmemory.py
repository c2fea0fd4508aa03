"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/inmemory.py.
"""

from __future__ import annotations

from typing import Any

from .base import CacheEntry


class InMemoryCacheTable:
    """Process-local cache table with lazy expiry checks."""

    def __init__(self) -> None:
        self._rows: dict[str, CacheEntry[Any]] = {}

    def get_fresh(self, key: str, now_s: float) -> CacheEntry[Any] | None:
        """
        Return the entry for `key` when it has not expired.

        Expired rows are left in place; they are only replaced by `put` or
        dropped by `delete`, `clear` and `purge_expired`.
        """
        row = self._rows.get(key)
        if row is None or not row.is_fresh(now_s):
            return None
        return row

    def put(self, key: str, entry: CacheEntry[Any]) -> None:
        self._rows[key] = entry

    def delete(self, key: str) -> bool:
        return self._rows.pop(key, None) is not None

    def clear(self) -> int:
        count = len(self._rows)
        self._rows.clear()
        return count

    def purge_expired(self, now_s: float) -> int:
        expired = [key for key, row in self._rows.items() if not row.is_fresh(now_s)]
        for key in expired:
            del self._rows[key]
        return len(expired)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, key: object) -> bool:
        return key in self._rows
