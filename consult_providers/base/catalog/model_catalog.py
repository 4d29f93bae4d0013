"""ModelCatalog: the set of addressable models, built once at startup.

The catalog is derived purely from the provider configurations. Iteration
order is provider order, then model order inside each provider, and never
changes for the life of the process.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from ..errors import CatalogConfigurationError
from ..models import ModelDescriptor, ProviderConfig
from .addressing import make_addressable_id, split_addressable_id


class ModelCatalog:
    """Immutable view over configured providers and their models."""

    def __init__(
        self,
        configs: Tuple[ProviderConfig, ...],
        descriptors: Tuple[ModelDescriptor, ...],
    ) -> None:
        self._configs = configs
        self._by_provider: Dict[str, ProviderConfig] = {c.provider_id: c for c in configs}
        self._descriptors = descriptors

    @classmethod
    def from_configs(cls, configs: Iterable[ProviderConfig]) -> "ModelCatalog":
        """Build the catalog from provider configs.

        Raises:
            CatalogConfigurationError: Duplicate provider ids or duplicate
                addressable ids.
        """
        configs = tuple(configs)
        seen_providers: set[str] = set()
        seen_ids: set[str] = set()
        descriptors = []
        for cfg in configs:
            if cfg.provider_id in seen_providers:
                raise CatalogConfigurationError(f"duplicate provider id {cfg.provider_id!r}")
            seen_providers.add(cfg.provider_id)
            for model_key, model_name in cfg.models.items():
                addressable_id = make_addressable_id(cfg.provider_id, model_key)
                if addressable_id in seen_ids:
                    raise CatalogConfigurationError(f"duplicate model id {addressable_id!r}")
                seen_ids.add(addressable_id)
                descriptors.append(
                    ModelDescriptor(
                        addressable_id=addressable_id,
                        display_name=model_name,
                        provider_id=cfg.provider_id,
                        provider_display_name=cfg.display_name,
                    )
                )
        return cls(configs, tuple(descriptors))

    def list_models(self) -> Tuple[ModelDescriptor, ...]:
        return self._descriptors

    def providers(self) -> Tuple[ProviderConfig, ...]:
        return self._configs

    def provider(self, provider_id: str) -> Optional[ProviderConfig]:
        return self._by_provider.get(provider_id)

    def resolve(self, addressable_id: str) -> Tuple[Optional[ProviderConfig], str]:
        """Return ``(config, model_key)``; ``config`` is ``None`` for unknown providers.

        The model key is returned as requested; callers check
        :meth:`ProviderConfig.has_model` themselves.
        """
        provider_id, model_key = split_addressable_id(addressable_id)
        return self._by_provider.get(provider_id), model_key

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, addressable_id: object) -> bool:
        if not isinstance(addressable_id, str):
            return False
        cfg, model_key = self.resolve(addressable_id)
        return cfg is not None and cfg.has_model(model_key)


__all__ = ["ModelCatalog"]
