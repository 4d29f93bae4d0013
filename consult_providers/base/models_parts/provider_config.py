"""
ProviderConfig: per-provider settings loaded once at startup.

Instances are frozen and their model mapping is a read-only view, so a single
tuple of configs can be shared by every in-flight consultation without
synchronization.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

MODEL_PLACEHOLDER = "{model}"


def _freeze(models: Mapping[str, str]) -> Mapping[str, str]:
    if isinstance(models, MappingProxyType):
        return models
    return MappingProxyType(dict(models))


@dataclass(frozen=True)
class ProviderConfig:
    """Configuration for one provider.

    Attributes:
        provider_id: Canonical provider id used in addressable ids (``"openai"``).
        display_name: Human-friendly provider name (``"OpenAI"``).
        api_key: Credential sent to the provider; may be empty. Never validated
            here, a bad key surfaces as a failure outcome at request time.
        models: Ordered mapping of model key to model display name.
        endpoint_template: Completion endpoint URL. May contain ``{model}``
            for providers that put the model key in the URL path.
    """

    provider_id: str
    display_name: str
    api_key: str = field(default="", repr=False)
    models: Mapping[str, str] = field(default_factory=dict)
    endpoint_template: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "models", _freeze(self.models))

    def has_model(self, model_key: str) -> bool:
        """Return True when ``model_key`` is configured for this provider."""
        return model_key in self.models

    def model_display_name(self, model_key: str) -> str:
        """Return the display name for ``model_key``, falling back to the key."""
        return self.models.get(model_key, model_key)

    def endpoint_for(self, model_key: str) -> str:
        """Render the endpoint for ``model_key``.

        Templates without a ``{model}`` placeholder are returned unchanged.
        """
        if MODEL_PLACEHOLDER not in self.endpoint_template:
            return self.endpoint_template
        return self.endpoint_template.replace(MODEL_PLACEHOLDER, model_key)

    def __repr__(self) -> str:
        key_state = "set" if self.api_key else "unset"
        return (
            f"ProviderConfig(provider_id={self.provider_id!r}, display_name={self.display_name!r}, "
            f"api_key=<{key_state}>, models={list(self.models)!r}, "
            f"endpoint_template={self.endpoint_template!r})"
        )


__all__ = ["ProviderConfig", "MODEL_PLACEHOLDER"]
