"""OpenAIProvider adapter for the OpenAI Chat Completions API.

All wire handling lives in ``BaseOpenAIStyleProvider``; this module only
exposes the OpenAI-named class registered with the provider factory.
"""

from __future__ import annotations

from ..base.openai_style_parts import BaseOpenAIStyleProvider


class OpenAIProvider(BaseOpenAIStyleProvider):
    """OpenAI provider built on the OpenAI-style base class."""


__all__ = ["OpenAIProvider"]
