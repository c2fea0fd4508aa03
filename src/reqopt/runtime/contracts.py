"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typed runtime policies for fetch callables.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Exponential backoff semantics for one fetch path."""

    max_retries: int = 3
    backoff_base_s: float = 1.0
    backoff_max_s: float = 30.0

    def delay_for(self, attempt: int) -> float:
        """Backoff before retry number `attempt + 1` (attempt is zero-based)."""
        return min(self.backoff_base_s * (2**attempt), self.backoff_max_s)
