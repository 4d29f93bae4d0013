"""consult_providers.config.env
============================

Centralized environment variable mapping and helpers for provider credentials.

Design Notes
------------
- Canonical mapping is defined in ``ENV_MAP``. Providers with more than one
  accepted variable list them in ``ENV_ALIASES`` with the canonical name first.
- Providers added through an external catalog and absent from ``ENV_MAP``
  fall back to the ``<PROVIDER>_API_KEY`` convention.
- Helpers never raise on missing providers or unset variables.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "google": "GOOGLE_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "groq": "GROQ_API_KEY",
}


# Provider -> ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "google": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
}


def _env_prefix(provider: str) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in provider.strip().upper())


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder value.

    Heuristics: contains 'placeholder', 'changeme', 'example', starts with
    'your_' or 'test_'. Case-insensitive, surrounding spaces ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("your_")
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical API key variable name for a provider.

    Unknown providers get ``<PROVIDER>_API_KEY``; an empty id yields ``None``.
    """
    if not provider or not provider.strip():
        return None
    return ENV_MAP.get(provider.lower(), f"{_env_prefix(provider)}_API_KEY")


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable API key variable names for a provider, canonical first."""
    canonical = get_env_var_name(provider)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get((provider or "").lower(), ()):
        if alias != canonical:
            yield alias


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns:
        ``(value, env_var_used)`` for the first non-empty candidate, or
        ``(None, None)`` when nothing is set.
    """
    for name in get_env_var_candidates(provider):
        if val := os.environ.get(name):
            return val, name
    return None, None


def get_endpoint_override(provider: str) -> Optional[str]:
    """Return ``<PROVIDER>_ENDPOINT`` when set and non-empty."""
    if not provider or not provider.strip():
        return None
    return (os.environ.get(f"{_env_prefix(provider)}_ENDPOINT") or "").strip() or None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
    "get_endpoint_override",
]
