"""
Consultation domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``consult_providers.base.models_parts`` to keep imports stable.
"""

from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response_batch import ChatResponseBatch
from .models_parts.model_descriptor import ModelDescriptor
from .models_parts.model_failure import ModelFailure
from .models_parts.model_outcome import ModelOutcome
from .models_parts.model_success import ModelSuccess
from .models_parts.provider_config import MODEL_PLACEHOLDER, ProviderConfig

__all__ = [
    "ChatRequest",
    "ChatResponseBatch",
    "ModelDescriptor",
    "ModelFailure",
    "ModelOutcome",
    "ModelSuccess",
    "ProviderConfig",
    "MODEL_PLACEHOLDER",
]
