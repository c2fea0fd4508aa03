"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by the request cache layer.

Failures raised by caller-supplied fetch functions are never wrapped; they
propagate unchanged to every caller attached to the fetch.
"""

from __future__ import annotations


class RequestCacheError(Exception):
    """Base error for reqopt."""


class InvalidCacheKeyError(RequestCacheError, ValueError):
    """Raised when a cache key is empty or not a string."""


class InvalidTTLError(RequestCacheError, ValueError):
    """Raised when a TTL is negative or not a number."""


class RequestCacheConfigError(RequestCacheError):
    """Raised when settings cannot be resolved into a working cache."""
