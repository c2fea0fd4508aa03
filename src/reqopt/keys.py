"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deterministic cache keys for endpoint reads.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from .errors import InvalidCacheKeyError


def request_key(endpoint: str, params: Mapping[str, Any] | None = None) -> str:
    """
    Build a cache key from an endpoint and its query parameters.

    Parameters are sorted by name and `None` values are dropped, so the same
    logical request always maps to the same key:

        request_key("/tables", {"status": "available"})
        -> "/tables?status=available"
    """
    if not isinstance(endpoint, str) or not endpoint.strip():
        raise InvalidCacheKeyError("Endpoint must be a non-empty string")
    base = endpoint.strip()
    pairs = [
        (str(name), _format_value(value))
        for name, value in sorted((params or {}).items(), key=lambda item: str(item[0]))
        if value is not None
    ]
    if not pairs:
        return base
    return f"{base}?{urlencode(pairs)}"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(item) for item in value)
    return str(value)
