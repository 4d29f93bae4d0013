"""OpenAI-style provider base split into focused modules.

Re-exports for convenience:
- BaseOpenAIStyleProvider
- style helpers (payload, headers, text extraction)
"""

from .base import BaseOpenAIStyleProvider
from .style_helpers import (
    build_bearer_headers,
    build_chat_payload,
    build_openai_messages,
    extract_openai_text,
)

__all__ = [
    "BaseOpenAIStyleProvider",
    "build_bearer_headers",
    "build_chat_payload",
    "build_openai_messages",
    "extract_openai_text",
]
