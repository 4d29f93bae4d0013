"""GoogleProvider adapter for the Gemini ``generateContent`` REST API.

Differences from the other providers:
* The model key is part of the URL path; the catalog endpoint carries a
  ``{model}`` placeholder rendered per call.
* The API key travels as the ``key`` query parameter.
* The system instruction is a separate ``systemInstruction`` object and
  generation limits live under ``generationConfig``.

Answer text is read from ``candidates[0].content.parts[0].text``.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.http import BaseHTTPProvider, PreparedRequest
from ..config.defaults import MAX_OUTPUT_TOKENS, SYSTEM_INSTRUCTION, TEMPERATURE


def build_generate_payload(prompt: str) -> Dict[str, Any]:
    """Build the JSON body for ``models/{model}:generateContent``."""
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
            "temperature": TEMPERATURE,
        },
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
    }


class GoogleProvider(BaseHTTPProvider):
    """Gemini REST adapter."""

    def _prepare_request(self, prompt: str, model_key: str) -> PreparedRequest:
        return PreparedRequest(
            url=self._config.endpoint_for(model_key),
            payload=build_generate_payload(prompt),
            headers={"Content-Type": "application/json"},
            params={"key": self._config.api_key},
        )

    def _extract_text(self, data: Any) -> Any:
        return data["candidates"][0]["content"]["parts"][0]["text"]


__all__ = ["GoogleProvider", "build_generate_payload"]
