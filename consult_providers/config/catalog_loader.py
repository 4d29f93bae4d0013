"""Catalog document loading and structural validation.

The catalog document lists providers, their endpoints and their models. It is
read once at startup, from the bundled ``consult_providers/catalog/providers.yaml``
or from the file named by ``CONSULT_CATALOG_FILE`` (JSON is tried first, then
YAML). Structure example:

.. code-block:: yaml

    providers:
      - id: openai
        display_name: OpenAI
        endpoint: https://api.openai.com/v1/chat/completions
        models:
          gpt-4o-mini: GPT-4o Mini

Any structural problem (unreadable file, parse error, missing field, empty
model mapping, duplicate provider id, ``":"`` inside a provider id) raises
:class:`CatalogConfigurationError`; the process must not serve traffic with a
malformed catalog.
"""

from __future__ import annotations

import json
import os
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..base.errors import CatalogConfigurationError
from .defaults import ADDRESS_DELIMITER, CATALOG_PACKAGE, CATALOG_RESOURCE


class ProviderEntry(BaseModel):
    """One provider section of the catalog document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1)
    display_name: Optional[str] = None
    endpoint: str = Field(..., min_length=1)
    models: Dict[str, str]

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("provider id must be non-empty")
        if ADDRESS_DELIMITER in value:
            raise ValueError(f"provider id must not contain {ADDRESS_DELIMITER!r}")
        return value

    @field_validator("endpoint")
    @classmethod
    def _validate_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("endpoint must be non-empty")
        return value

    @field_validator("models")
    @classmethod
    def _validate_models(cls, value: Dict[str, str]) -> Dict[str, str]:
        if not value:
            raise ValueError("models must be a non-empty mapping")
        for key, name in value.items():
            if not key.strip():
                raise ValueError("model keys must be non-empty")
            if not str(name).strip():
                raise ValueError(f"model {key!r} needs a display name")
        return value

    def resolved_display_name(self) -> str:
        """Display name, defaulting to the capitalized provider id."""
        return self.display_name or self.id[:1].upper() + self.id[1:]


class CatalogDocument(BaseModel):
    """Root of the catalog document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    providers: List[ProviderEntry]

    @model_validator(mode="after")
    def _validate_unique_ids(self) -> "CatalogDocument":
        if not self.providers:
            raise ValueError("catalog must configure at least one provider")
        seen: set[str] = set()
        for entry in self.providers:
            if entry.id in seen:
                raise ValueError(f"duplicate provider id {entry.id!r}")
            seen.add(entry.id)
        return self


def _parse_text(text: str, source: str) -> Any:
    """Parse JSON first, then YAML; raise on anything unparseable."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CatalogConfigurationError(f"catalog {source} is neither valid JSON nor YAML: {exc}") from exc


def read_catalog_text(path: Optional[str] = None) -> tuple[str, str]:
    """Return ``(text, source)`` for the catalog document.

    Parameters:
        path: Explicit catalog path. When ``None``, ``CONSULT_CATALOG_FILE`` is
            consulted, then the bundled resource.
    """
    path = path or os.getenv("CONSULT_CATALOG_FILE") or None
    if path is None:
        text = resources.files(CATALOG_PACKAGE).joinpath(CATALOG_RESOURCE).read_text(encoding="utf-8")
        return text, f"{CATALOG_PACKAGE}/{CATALOG_RESOURCE}"
    p = Path(path).expanduser()
    try:
        return p.read_text(encoding="utf-8"), str(p)
    except OSError as exc:
        raise CatalogConfigurationError(f"cannot read catalog file {p}: {exc}") from exc


def parse_catalog(data: Any, source: str = "<memory>") -> CatalogDocument:
    """Validate an already-parsed catalog mapping.

    Raises:
        CatalogConfigurationError: When the structure is invalid.
    """
    if not isinstance(data, dict):
        raise CatalogConfigurationError(f"catalog {source} must be a mapping with a 'providers' list")
    try:
        return CatalogDocument.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise CatalogConfigurationError(f"invalid catalog {source}: {details}") from exc


def load_catalog_document(path: Optional[str] = None) -> CatalogDocument:
    """Read and validate the catalog document."""
    text, source = read_catalog_text(path)
    return parse_catalog(_parse_text(text, source), source)


__all__ = [
    "ProviderEntry",
    "CatalogDocument",
    "read_catalog_text",
    "parse_catalog",
    "load_catalog_document",
]
