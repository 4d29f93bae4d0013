"""CompletionProvider Protocol (single-class module).

Defines the one capability every provider adapter implements.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionProvider(Protocol):
    """Minimal interface for text-completion provider adapters.

    Implementations translate a generic ``(prompt, model_key)`` request into
    their provider's wire format, perform exactly one outbound call and return
    the primary text of the answer. They never retry, cache or rate limit;
    such policies belong in wrappers around this interface.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"`` or ``"google"``."""
        ...

    async def send_completion(self, prompt: str, model_key: str) -> str:
        """Return the completion text for ``prompt`` from ``model_key``.

        Raises:
            AdapterError: Non-success HTTP status or unusable payload.
            TransportError: The network call could not complete.
        """
        ...
