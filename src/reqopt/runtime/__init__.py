"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: runtime/__init__.py.
"""

from .coalescing import RequestCoalescer
from .contracts import RetryPolicy
from .retry import call_with_retry, is_transient_error, retrying
from .sweeper import CacheSweeper
from .timing import Debounced, Throttled, debounce, throttle

__all__ = [
    "RequestCoalescer",
    "RetryPolicy",
    "call_with_retry",
    "is_transient_error",
    "retrying",
    "CacheSweeper",
    "Debounced",
    "Throttled",
    "debounce",
    "throttle",
]
