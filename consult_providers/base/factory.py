"""Provider Factory utilities.

Purpose
-------
Centralize creation of adapter instances implementing the
``CompletionProvider`` protocol. Adapters are imported lazily using
``importlib`` so that importing the factory pulls in no provider module.

Scope
-----
Supported providers: ``openai``, ``anthropic``, ``google``, ``deepseek``,
``groq`` and the offline ``mock`` adapter.

Startup semantics
-----------------
:func:`build_adapters` builds one adapter per configured provider. A provider
present in the catalog without a registered adapter is a configuration error
and aborts startup with :class:`CatalogConfigurationError`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Iterable, Tuple, Type

from .errors import CatalogConfigurationError, UnknownProviderError
from .interfaces import CompletionProvider
from .logging import get_logger, log_event
from .models import ProviderConfig

_MOCK = "mock"


class ProviderFactory:
    """Create provider adapters based on a canonical id (e.g., ``"openai"``).

    Design notes
    ------------
    - Uses ``importlib.import_module`` for explicit import semantics.
    - Raises :class:`UnknownProviderError` with precise messages for unknown
      ids, import failures, missing classes, and constructor errors.
    """

    # Map canonical provider ids to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "consult_providers.openai.client", "class": "OpenAIProvider"},
        "anthropic": {"module": "consult_providers.anthropic.client", "class": "AnthropicProvider"},
        "google": {"module": "consult_providers.google.client", "class": "GoogleProvider"},
        "deepseek": {"module": "consult_providers.deepseek.client", "class": "DeepseekProvider"},
        "groq": {"module": "consult_providers.groq.client", "class": "GroqProvider"},
        _MOCK: {"module": "consult_providers.mock.client", "class": "MockProvider"},
    }

    @classmethod
    def create(cls, provider: str, config: ProviderConfig, **kwargs: Any) -> CompletionProvider:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider id (e.g., ``"openai"``) selecting the adapter class.
        config:
            Provider configuration handed to the adapter constructor.
        **kwargs:
            Adapter-specific constructor kwargs (e.g. ``client`` for HTTP
            adapters, ``delay``/``fail`` for the mock).

        Raises
        ------
        UnknownProviderError
            If the id is unknown, the module fails to import, the class is
            missing, or the constructor raises.
        """
        name = (provider or "").lower().strip()
        entry = cls._PROVIDERS.get(name)
        if not entry:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = entry["module"], entry["class"]

        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover - registry typo
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(config, **kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider ids in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


def build_adapters(
    configs: Iterable[ProviderConfig],
    *,
    use_mocks: bool = False,
    **kwargs: Any,
) -> Dict[str, CompletionProvider]:
    """Build the process-wide ``provider_id -> adapter`` map.

    Parameters
    ----------
    configs:
        Provider configurations, usually from ``load_provider_configs()``.
    use_mocks:
        Serve every provider with :class:`MockProvider` (offline mode).
    **kwargs:
        Forwarded to every adapter constructor.

    Raises
    ------
    CatalogConfigurationError
        When a configured provider has no adapter implementation.
    """
    logger = get_logger("consult.factory")
    adapters: Dict[str, CompletionProvider] = {}
    for cfg in configs:
        adapter_id = _MOCK if use_mocks else cfg.provider_id
        try:
            adapters[cfg.provider_id] = ProviderFactory.create(adapter_id, cfg, **kwargs)
        except UnknownProviderError as exc:
            raise CatalogConfigurationError(
                f"provider '{cfg.provider_id}' is configured but has no adapter: {exc.message}"
            ) from exc
    log_event(logger, "factory.adapters_built", providers=list(adapters), mock=use_mocks)
    return adapters


__all__ = ["ProviderFactory", "build_adapters"]
