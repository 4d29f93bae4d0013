"""BaseOpenAIStyleProvider: shared adapter for OpenAI-compatible chat APIs.

Purpose:
- Provide one implementation of the Chat Completions wire format for every
  provider exposing it (OpenAI, DeepSeek, Groq). Concrete subclasses only
  pin the canonical provider id they serve.

External dependencies:
- ``httpx`` through :class:`BaseHTTPProvider`; no vendor SDK.

Request shape:
- ``POST <endpoint>`` with ``Authorization: Bearer <key>`` and body
  ``{model, messages: [system, user], max_tokens, temperature}``.
- Answer text at ``choices[0].message.content``.
"""

from __future__ import annotations

from typing import Any

from ..http import BaseHTTPProvider, PreparedRequest
from .style_helpers import build_bearer_headers, build_chat_payload, extract_openai_text


class BaseOpenAIStyleProvider(BaseHTTPProvider):
    """Reusable base class for OpenAI-compatible providers."""

    def _prepare_request(self, prompt: str, model_key: str) -> PreparedRequest:
        return PreparedRequest(
            url=self._config.endpoint_for(model_key),
            payload=build_chat_payload(model_key, prompt),
            headers=build_bearer_headers(self._config.api_key),
        )

    def _extract_text(self, data: Any) -> Any:
        return extract_openai_text(data)


__all__ = ["BaseOpenAIStyleProvider"]
