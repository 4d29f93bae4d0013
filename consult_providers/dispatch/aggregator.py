"""Order-preserving packaging of settled outcomes into a response batch."""

from __future__ import annotations

from typing import Mapping, Sequence

from ..base.errors import AggregationError
from ..base.models import ChatResponseBatch, ModelOutcome


def aggregate(requested_ids: Sequence[str], outcomes_by_index: Mapping[int, ModelOutcome]) -> ChatResponseBatch:
    """Return the batch whose ``i``-th outcome answers ``requested_ids[i]``.

    Raises:
        AggregationError: An index is missing or extra, or an outcome's
            addressable id differs from the id requested at its index.
    """
    expected = set(range(len(requested_ids)))
    got = set(outcomes_by_index)
    if got != expected:
        missing = sorted(expected - got)
        extra = sorted(got - expected)
        raise AggregationError(f"outcome indexes do not match request: missing={missing} extra={extra}")
    ordered = []
    for index, requested_id in enumerate(requested_ids):
        outcome = outcomes_by_index[index]
        if outcome.addressable_id != requested_id:
            raise AggregationError(
                f"outcome {index} answers {outcome.addressable_id!r}, expected {requested_id!r}"
            )
        ordered.append(outcome)
    return ChatResponseBatch(tuple(ordered))


__all__ = ["aggregate"]
