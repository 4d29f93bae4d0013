"""
ChatRequest: one consultation as submitted by a caller.

Request-scoped and consumed once by the dispatcher; never persisted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple


@dataclass(frozen=True)
class ChatRequest:
    """A prompt plus the ordered addressable model ids to consult.

    The id sequence keeps the caller's order (and any duplicates); the
    response batch mirrors it one-to-one. Validation happens in the
    dispatcher, not here, so malformed requests can still be represented and
    rejected with a proper error.
    """

    prompt: str
    addressable_model_ids: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, prompt: str, addressable_model_ids: Iterable[str]) -> "ChatRequest":
        return cls(prompt=prompt, addressable_model_ids=tuple(addressable_model_ids))


__all__ = ["ChatRequest"]
