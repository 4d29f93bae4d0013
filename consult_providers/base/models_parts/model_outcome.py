"""ModelOutcome: tagged union of the two per-model results."""
from __future__ import annotations

from typing import Union

from .model_failure import ModelFailure
from .model_success import ModelSuccess

ModelOutcome = Union[ModelSuccess, ModelFailure]

__all__ = ["ModelOutcome"]
