"""GroqProvider adapter for Groq's OpenAI-compatible endpoint."""

from __future__ import annotations

from ..base.openai_style_parts import BaseOpenAIStyleProvider


class GroqProvider(BaseOpenAIStyleProvider):
    """Groq provider built on the OpenAI-style base class."""


__all__ = ["GroqProvider"]
