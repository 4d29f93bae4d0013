"""Shared async HTTP client pool for provider adapters.

Purpose:
    Provide a centralized pool of reusable ``httpx.AsyncClient`` instances so
    concurrent provider calls share connection pools instead of allocating a
    client per call. Timeouts derive exclusively from
    :func:`get_timeout_config`.

Lifecycle & cleanup:
    - Clients are cached by ``(event loop, purpose)`` (e.g. ``"openai.chat"``).
      Kept-alive connections belong to the loop that opened them, so every
      running loop gets its own clients. Adapters send absolute URLs, so no
      base URL is bound to a client.
    - Entries of loops that have been closed are dropped the next time a
      client is requested. Their connections cannot be closed any more.
    - The service closes the pool on shutdown via :func:`aclose_all_clients`;
      short-lived callers (the CLI) do the same before their loop ends.

Design notes:
    - Adapters may be given an explicit client instead (tests inject clients
      backed by ``httpx.MockTransport``); the pool is only the default.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_PoolKey = Tuple[Optional[asyncio.AbstractEventLoop], str]

_CLIENTS: Dict[_PoolKey, httpx.AsyncClient] = {}
_LOCK = threading.RLock()


def _build_timeout() -> httpx.Timeout:
    cfg = get_timeout_config()
    return httpx.Timeout(cfg.http_timeout_seconds, connect=cfg.connect_timeout_seconds)


def _current_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _drop_closed_loops() -> None:
    stale = [key for key in _CLIENTS if key[0] is not None and key[0].is_closed()]
    for key in stale:
        del _CLIENTS[key]


def get_async_client(purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for ``purpose`` in the running loop.

    The first request for a purpose in a loop creates the client; subsequent
    requests from the same loop reuse it. A client that has been closed is
    replaced. Called outside a running loop, the client is shared by other
    loop-less callers only.

    Parameters:
        purpose: Short stable string discriminating pools, typically
            ``"<provider>.chat"``.

    Returns:
        A reusable ``httpx.AsyncClient`` instance.
    """
    key = (_current_loop(), purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        _drop_closed_loops()
        client = httpx.AsyncClient(timeout=_build_timeout())
        _CLIENTS[key] = client
        return client


async def aclose_all_clients() -> None:
    """Close the running loop's clients (and loop-less ones) and clear the pool.

    Clients owned by other loops are forgotten without being closed.
    """
    loop = _current_loop()
    with _LOCK:
        entries = list(_CLIENTS.items())
        _CLIENTS.clear()
    for (owner, _), c in entries:
        if owner is None or owner is loop:
            await c.aclose()


__all__ = ["get_async_client", "aclose_all_clients"]
