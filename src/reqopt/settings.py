"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Request cache settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import RequestCacheConfigError

METRICS_BACKENDS = ("none", "prometheus")


def _env_first(*names: str, default: str | None = None) -> str | None:
    """Return the first non-empty environment variable in `names`."""
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


def _env_float(name: str, default: float | None) -> float | None:
    raw = _env_first(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RequestCacheConfigError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class RequestCacheSettings:
    """Explicit settings used to build a request cache."""

    default_ttl_s: float = 5.0
    sweep_interval_s: float | None = None
    metrics_backend: str = "none"
    metrics_namespace: str = "reqopt"

    def __post_init__(self) -> None:
        if not self.default_ttl_s >= 0:
            raise RequestCacheConfigError("default_ttl_s must be non-negative")
        if self.sweep_interval_s is not None and not self.sweep_interval_s > 0:
            raise RequestCacheConfigError("sweep_interval_s must be positive when set")
        if self.metrics_backend not in METRICS_BACKENDS:
            raise RequestCacheConfigError(
                f"Unknown metrics backend '{self.metrics_backend}'"
            )

    @staticmethod
    def from_env() -> "RequestCacheSettings":
        """Load settings from `REQOPT_*` environment variables."""
        return RequestCacheSettings(
            default_ttl_s=_env_float("REQOPT_CACHE_TTL_S", 5.0),
            sweep_interval_s=_env_float("REQOPT_CACHE_SWEEP_INTERVAL_S", None),
            metrics_backend=(
                _env_first("REQOPT_METRICS_BACKEND", default="none") or "none"
            ).lower(),
            metrics_namespace=(
                _env_first("REQOPT_METRICS_NAMESPACE", default="reqopt") or "reqopt"
            ),
        )
