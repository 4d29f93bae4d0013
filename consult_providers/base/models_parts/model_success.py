"""
ModelSuccess outcome: a provider answered with text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ModelSuccess:
    """Successful outcome for one requested model.

    Attributes:
        addressable_id: The requested ``"<provider>:<model>"`` id.
        display_name: Model display name.
        provider_display_name: Provider display name.
        text: Primary text extracted from the provider response.
        elapsed_ms: Duration of this call alone, in whole milliseconds.
    """

    addressable_id: str
    display_name: str
    provider_display_name: str
    text: str
    elapsed_ms: int

    success = True

    def __post_init__(self) -> None:
        if self.elapsed_ms < 0:
            raise ValueError("elapsed_ms must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modelId": self.addressable_id,
            "modelName": self.display_name,
            "provider": self.provider_display_name,
            "response": self.text,
            "responseTime": self.elapsed_ms,
            "success": True,
        }


__all__ = ["ModelSuccess"]
