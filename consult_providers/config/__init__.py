"""Unified configuration layer for providers and the service.

Goals
-----
* Turn the catalog document into immutable :class:`ProviderConfig` values.
* Merge sources in a predictable order:
    1. Bundled catalog (``consult_providers/catalog/providers.yaml``)
    2. External catalog pointed to by ``CONSULT_CATALOG_FILE`` (replaces 1)
    3. Optional ``.env`` file (``DOTENV_FILE``, default ``.env``)
    4. Environment variables (``<PROVIDER>_API_KEY``, ``<PROVIDER>_ENDPOINT``)
* Provide the service settings (host, port, reload, CORS, mock adapters).

Environment Variable Conventions
--------------------------------
``<PROVIDER>_API_KEY`` (``GEMINI_API_KEY`` accepted for google),
``<PROVIDER>_ENDPOINT``, ``CONSULT_SERVICE_HOST``, ``CONSULT_SERVICE_PORT``,
``CONSULT_SERVICE_RELOAD``, ``CONSULT_CORS_ORIGINS``, ``CONSULT_USE_MOCKS``.

Public API
----------
* load_provider_configs(path: str | None = None) -> tuple[ProviderConfig, ...]
* get_settings() -> ServiceSettings
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from ..base.errors import CatalogConfigurationError
from ..base.models import MODEL_PLACEHOLDER, ProviderConfig
from .catalog_loader import CatalogDocument, load_catalog_document
from .defaults import (
    MODEL_IN_PATH_PROVIDERS,
    SERVICE_CORS_DEFAULT_ORIGINS,
    SERVICE_DEFAULT_HOST,
    SERVICE_DEFAULT_PORT,
)
from .env import get_endpoint_override, is_placeholder, resolve_provider_key

_DOTENV_LOADED = False

_TRUTHY = {"1", "true", "yes", "on"}


def _load_dotenv_once() -> None:
    """Lightweight .env loader (no external dependency).

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Existing environment variables win unless their current
    value looks like a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                if k.startswith("export "):
                    k = k[len("export "):].strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def reset_dotenv_state() -> None:
    """Allow the next config load to re-read the ``.env`` file (tests)."""
    global _DOTENV_LOADED
    _DOTENV_LOADED = False


def configs_from_document(doc: CatalogDocument) -> Tuple[ProviderConfig, ...]:
    """Build provider configs from a validated catalog, applying env values.

    API keys are read from the environment and passed through unvalidated;
    an unset key becomes an empty string and the provider reports the
    rejection at call time.

    Raises:
        CatalogConfigurationError: When a provider that takes the model in the
            URL path ends up with an endpoint lacking ``{model}``.
    """
    configs = []
    for entry in doc.providers:
        api_key, _ = resolve_provider_key(entry.id)
        endpoint = (get_endpoint_override(entry.id) or entry.endpoint).strip()
        if entry.id in MODEL_IN_PATH_PROVIDERS and MODEL_PLACEHOLDER not in endpoint:
            raise CatalogConfigurationError(
                f"endpoint for provider '{entry.id}' must contain {MODEL_PLACEHOLDER}: {endpoint}"
            )
        configs.append(
            ProviderConfig(
                provider_id=entry.id,
                display_name=entry.resolved_display_name(),
                api_key=api_key or "",
                models=dict(entry.models),
                endpoint_template=endpoint,
            )
        )
    return tuple(configs)


def load_provider_configs(path: Optional[str] = None) -> Tuple[ProviderConfig, ...]:
    """Load the catalog and return one :class:`ProviderConfig` per provider.

    Raises:
        CatalogConfigurationError: When the catalog is unreadable or invalid.
    """
    _load_dotenv_once()
    return configs_from_document(load_catalog_document(path))


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ServiceSettings:
    """Runtime settings for the HTTP service and dev server."""

    host: str = SERVICE_DEFAULT_HOST
    port: int = SERVICE_DEFAULT_PORT
    reload: bool = False
    cors_origins: Tuple[str, ...] = tuple(SERVICE_CORS_DEFAULT_ORIGINS.split(","))
    use_mocks: bool = False


def get_settings() -> ServiceSettings:
    """Read service settings from the environment (``.env`` included)."""
    _load_dotenv_once()
    raw_port = os.getenv("CONSULT_SERVICE_PORT", "").strip()
    try:
        port = int(raw_port) if raw_port else SERVICE_DEFAULT_PORT
    except ValueError:
        port = SERVICE_DEFAULT_PORT
    origins_raw = os.getenv("CONSULT_CORS_ORIGINS", SERVICE_CORS_DEFAULT_ORIGINS)
    origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip())
    return ServiceSettings(
        host=os.getenv("CONSULT_SERVICE_HOST", "").strip() or SERVICE_DEFAULT_HOST,
        port=port,
        reload=_env_flag("CONSULT_SERVICE_RELOAD"),
        cors_origins=origins,
        use_mocks=_env_flag("CONSULT_USE_MOCKS"),
    )


__all__ = [
    "ServiceSettings",
    "configs_from_document",
    "get_settings",
    "load_provider_configs",
    "reset_dotenv_state",
]
