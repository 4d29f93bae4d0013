"""
ModelDescriptor: one addressable model in the catalog.

Built once from the provider configuration at process start and immutable for
the life of the process.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ModelDescriptor:
    """A single catalog entry.

    Attributes:
        addressable_id: Globally unique ``"<provider>:<model>"`` identifier.
        display_name: Human-friendly model name.
        provider_id: Provider id owning this model.
        provider_display_name: Human-friendly provider name.
    """

    addressable_id: str
    display_name: str
    provider_id: str
    provider_display_name: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape used by the models endpoint."""
        return {
            "id": self.addressable_id,
            "name": self.display_name,
            "provider": self.provider_display_name,
            "providerId": self.provider_id,
        }


__all__ = ["ModelDescriptor"]
