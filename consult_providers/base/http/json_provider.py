"""Shared request/response plumbing for JSON-over-HTTP provider adapters.

Summary:
- Subclasses describe the request (URL, headers, query, body) and where the
  answer text lives in the response; this base performs the single POST.
- Non-2xx statuses become :class:`AdapterError` with the provider's own error
  message when the body carries one.
- 2xx bodies that cannot be decoded, are not JSON or lack the text become
  :class:`AdapterError`.
- Any other ``httpx.RequestError`` (DNS, connect, reset, transport timeouts,
  redirect loops) and ``httpx.InvalidURL`` become :class:`TransportError`
  with a generic connectivity message.

Errors & Observability:
- Emits ``chat.start`` (prompt length only), ``chat.end`` (latency) and
  ``chat.error`` (code/status) events through the shared ``consult`` logger.

No retries, caching or rate limiting happen here.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from ..errors import AdapterError, ErrorCode, ProviderCallError, TransportError, classify_status
from ..logging import LogContext, get_logger, log_event
from ..models import ProviderConfig
from .client import get_async_client


@dataclass
class PreparedRequest:
    """One outbound call, fully described."""

    url: str
    payload: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)


def extract_error_message(data: Any) -> Optional[str]:
    """Return the provider's error text from a failure body, if any.

    Accepts ``{"error": {"message": ...}}``, ``{"error": "..."}`` and
    ``{"message": "..."}``.
    """
    if not isinstance(data, dict):
        return None
    err = data.get("error")
    if isinstance(err, dict):
        msg = err.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg
    if isinstance(err, str) and err.strip():
        return err
    msg = data.get("message")
    if isinstance(msg, str) and msg.strip():
        return msg
    return None


class BaseHTTPProvider:
    """Base class for adapters speaking a JSON REST API via ``httpx``.

    Subclasses implement ``_prepare_request`` and ``_extract_text``.

    Parameters:
        config: Provider configuration (id, display name, key, endpoint).
        client: Optional explicit ``httpx.AsyncClient``; defaults to the pooled
            client for ``"<provider>.chat"``. Tests pass clients backed by
            ``httpx.MockTransport``.
    """

    def __init__(self, config: ProviderConfig, *, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client
        self._logger = get_logger(f"consult.providers.{config.provider_id}")

    @property
    def provider_name(self) -> str:
        return self._config.provider_id

    @property
    def display_name(self) -> str:
        return self._config.display_name

    @property
    def config(self) -> ProviderConfig:
        return self._config

    # ----- subclass surface -----
    def _prepare_request(self, prompt: str, model_key: str) -> PreparedRequest:  # pragma: no cover - abstract
        raise NotImplementedError

    def _extract_text(self, data: Any) -> Any:  # pragma: no cover - abstract
        """Return the answer text from a decoded 2xx body (may raise on bad shape)."""
        raise NotImplementedError

    # ----- call -----
    async def send_completion(self, prompt: str, model_key: str) -> str:
        """Perform one completion call and return the answer text.

        Raises:
            AdapterError: Non-success status or unusable 2xx payload.
            TransportError: The request could not be delivered.
        """
        ctx = LogContext(provider=self.provider_name, model=model_key)
        log_event(self._logger, "chat.start", ctx, prompt_chars=len(prompt))
        req = self._prepare_request(prompt, model_key)
        t0 = time.perf_counter()
        try:
            resp = await self._http().post(
                req.url,
                json=req.payload,
                headers=req.headers,
                params=req.params or None,
            )
            text = self._handle_response(resp, model_key)
        except ProviderCallError as err:
            self._log_error(ctx, err)
            raise
        except httpx.DecodingError as exc:
            err = self._unexpected_response(model_key)
            self._log_error(ctx, err)
            raise err from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            code = ErrorCode.TIMEOUT if isinstance(exc, httpx.TimeoutException) else None
            err = TransportError(
                f"Could not reach {self.display_name}: {type(exc).__name__}",
                provider=self.provider_name,
                model=model_key,
                code=code,
            )
            self._log_error(ctx, err)
            raise err from exc
        latency_ms = (time.perf_counter() - t0) * 1000.0
        log_event(self._logger, "chat.end", ctx, latency_ms=round(latency_ms, 2), response_chars=len(text))
        return text

    # ----- helpers -----
    def _http(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return get_async_client(f"{self.provider_name}.chat")

    def _handle_response(self, resp: httpx.Response, model_key: str) -> str:
        if not resp.is_success:
            raise self._status_error(resp, model_key)
        try:
            data = resp.json()
        except ValueError as exc:
            raise self._unexpected_response(model_key) from exc
        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise self._unexpected_response(model_key) from exc
        if not isinstance(text, str):
            raise self._unexpected_response(model_key)
        return text

    def _status_error(self, resp: httpx.Response, model_key: str) -> AdapterError:
        try:
            message = extract_error_message(resp.json())
        except ValueError:
            message = None
        return AdapterError(
            message or f"{self.display_name} API Error",
            provider=self.provider_name,
            model=model_key,
            status=resp.status_code,
            code=classify_status(resp.status_code),
        )

    def _unexpected_response(self, model_key: str) -> AdapterError:
        return AdapterError(
            f"{self.display_name} API returned an unexpected response",
            provider=self.provider_name,
            model=model_key,
        )

    def _log_error(self, ctx: LogContext, err: ProviderCallError) -> None:
        log_event(
            self._logger,
            "chat.error",
            ctx,
            level=logging.ERROR,
            code=err.code.value,
            status=getattr(err, "status", None),
            error=err.message,
        )


__all__ = ["BaseHTTPProvider", "PreparedRequest", "extract_error_message"]
