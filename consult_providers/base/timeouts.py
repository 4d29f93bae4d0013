"""Transport timeout configuration for provider calls.

The core defines no cancellation path and no per-consultation deadline; the
only timeout it applies is the HTTP transport timeout of the pooled clients.
A call exceeding it fails with a ``TransportError`` for that model alone.

Supported environment variables (all optional):
    CONSULT_HTTP_TIMEOUT_SECONDS     overall per-request timeout (default 60)
    CONSULT_CONNECT_TIMEOUT_SECONDS  connection establishment (default 10)
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from ..config.defaults import DEFAULT_CONNECT_TIMEOUT_SECONDS, DEFAULT_HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Read/write/pool timeout for one provider call.
        connect_timeout_seconds: Timeout for establishing the connection.
    """

    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read a positive float from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`, parsing env on first use."""
    global _CACHED  # noqa: PLW0603 - module cache
    if _CACHED is None:
        _CACHED = TimeoutConfig(
            http_timeout_seconds=_parse_env_float("CONSULT_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
            connect_timeout_seconds=_parse_env_float(
                "CONSULT_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS
            ),
        )
    return _CACHED


def reset_timeout_config() -> None:
    """Forget the cached configuration so the next call re-reads the environment."""
    global _CACHED  # noqa: PLW0603 - module cache
    _CACHED = None


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "reset_timeout_config",
]
