"""AnthropicProvider adapter.

This module implements the Anthropic Messages API over plain HTTP.

Key behaviors:
* Auth travels in ``x-api-key`` with a pinned ``anthropic-version`` header.
* The system instruction is a top-level ``system`` field, not a message.
* Answer text is the first content block: ``content[0].text``.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.http import BaseHTTPProvider, PreparedRequest
from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    MAX_OUTPUT_TOKENS,
    SYSTEM_INSTRUCTION,
    TEMPERATURE,
)


def build_messages_payload(model: str, prompt: str) -> Dict[str, Any]:
    """Build the JSON body for ``POST /v1/messages``."""
    return {
        "model": model,
        "max_tokens": MAX_OUTPUT_TOKENS,
        "temperature": TEMPERATURE,
        "system": SYSTEM_INSTRUCTION,
        "messages": [{"role": "user", "content": prompt}],
    }


class AnthropicProvider(BaseHTTPProvider):
    """Anthropic Messages API adapter."""

    def _prepare_request(self, prompt: str, model_key: str) -> PreparedRequest:
        return PreparedRequest(
            url=self._config.endpoint_for(model_key),
            payload=build_messages_payload(model_key, prompt),
            headers={
                "x-api-key": self._config.api_key,
                "anthropic-version": ANTHROPIC_API_VERSION,
                "Content-Type": "application/json",
            },
        )

    def _extract_text(self, data: Any) -> Any:
        return data["content"][0]["text"]


__all__ = ["AnthropicProvider", "build_messages_payload"]
