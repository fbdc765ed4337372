"""Timeout configuration for provider HTTP traffic.

All adapters derive their ``httpx.Timeout`` from :func:`get_timeout_config` so
no module hard-codes its own deadline.

Environment overrides (all optional, positive floats):
    CONDUIT_TIMEOUT_CONNECT_SECONDS
    CONDUIT_TIMEOUT_HTTP_SECONDS

The parsed config is cached per process and refreshed when the override
variables change, which lets tests adjust them with ``monkeypatch.setenv``.
Invalid or non-positive values fall back to the defaults.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx

CONNECT_TIMEOUT_ENV = "CONDUIT_TIMEOUT_CONNECT_SECONDS"
HTTP_TIMEOUT_ENV = "CONDUIT_TIMEOUT_HTTP_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Deadline for establishing the TCP/TLS connection.
        http_timeout_seconds: Deadline for reading, writing and pool acquisition
            on a single request.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0

    def as_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, returning ``default`` otherwise."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    guard = "/".join([os.getenv(CONNECT_TIMEOUT_ENV, ""), os.getenv(HTTP_TIMEOUT_ENV, "")])
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(CONNECT_TIMEOUT_ENV, defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float(HTTP_TIMEOUT_ENV, defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
