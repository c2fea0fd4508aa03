"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/base.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """One cached fetch result with creation and expiration timestamps."""

    value: T
    created_at_s: float
    expires_at_s: float

    def is_fresh(self, now_s: float) -> bool:
        return now_s < self.expires_at_s


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Point-in-time snapshot of cache occupancy."""

    size: int
    keys: tuple[str, ...]
    pending: int = 0
