"""
ChatResponseBatch: the complete, order-preserving result of a consultation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

from .model_outcome import ModelOutcome


@dataclass(frozen=True)
class ChatResponseBatch:
    """Immutable ordered sequence of outcomes.

    Element ``i`` answers the ``i``-th requested addressable id.
    """

    outcomes: Tuple[ModelOutcome, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self) -> Iterator[ModelOutcome]:
        return iter(self.outcomes)

    def __getitem__(self, index: int) -> ModelOutcome:
        return self.outcomes[index]

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failure_count(self) -> int:
        return len(self.outcomes) - self.success_count

    def to_list(self) -> List[Dict[str, Any]]:
        """Return the JSON-serializable wire representation."""
        return [o.to_dict() for o in self.outcomes]


__all__ = ["ChatResponseBatch"]
