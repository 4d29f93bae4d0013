"""
Helper utilities for OpenAI-style Chat Completions providers.

Purpose:
- Build the chat completions body shared by every OpenAI-compatible API
  (OpenAI, DeepSeek, Groq): a system message followed by the user prompt.
- Extract the assistant text from a decoded response body.

No network I/O happens here.
"""

from __future__ import annotations

import typing as _t

from ...config.defaults import MAX_OUTPUT_TOKENS, SYSTEM_INSTRUCTION, TEMPERATURE


def build_openai_messages(prompt: str, system_message: str = SYSTEM_INSTRUCTION) -> list[dict[str, str]]:
    """Return ``[system, user]`` messages for a single-turn consultation."""
    return [
        {"role": "system", "content": system_message},
        {"role": "user", "content": prompt},
    ]


def build_chat_payload(model: str, prompt: str) -> dict[str, _t.Any]:
    """Build the JSON body for ``POST /chat/completions``."""
    return {
        "model": model,
        "messages": build_openai_messages(prompt),
        "max_tokens": MAX_OUTPUT_TOKENS,
        "temperature": TEMPERATURE,
    }


def build_bearer_headers(api_key: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}


def extract_openai_text(data: _t.Any) -> _t.Any:
    """Return ``choices[0].message.content`` from a decoded response body.

    Raises ``KeyError``/``IndexError``/``TypeError`` when the shape is wrong;
    the caller turns those into an unexpected-response error.
    """
    return data["choices"][0]["message"]["content"]


__all__ = [
    "build_openai_messages",
    "build_chat_payload",
    "build_bearer_headers",
    "extract_openai_text",
]
