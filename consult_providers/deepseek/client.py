"""DeepseekProvider adapter using the OpenAI-compatible Chat Completions API.

DeepSeek accepts the OpenAI request body and bearer auth unchanged, so the
shared base handles everything; the endpoint comes from the catalog.
"""

from __future__ import annotations

from ..base.openai_style_parts import BaseOpenAIStyleProvider


class DeepseekProvider(BaseOpenAIStyleProvider):
    """Deepseek provider built on the OpenAI-style base class."""


__all__ = ["DeepseekProvider"]
