"""
ModelFailure outcome: the call for one model could not produce text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..errors_parts.error_code import ErrorCode


@dataclass(frozen=True)
class ModelFailure:
    """Failed outcome for one requested model.

    Attributes:
        addressable_id: The requested ``"<provider>:<model>"`` id.
        display_name: Model display name (the model key when unknown).
        provider_display_name: Provider display name.
        error_message: Message safe to show to the caller.
        error_code: Normalized classification of the failure.
    """

    addressable_id: str
    display_name: str
    provider_display_name: str
    error_message: str
    error_code: ErrorCode = ErrorCode.UNKNOWN

    success = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modelId": self.addressable_id,
            "modelName": self.display_name,
            "provider": self.provider_display_name,
            "error": self.error_message,
            "code": self.error_code.value,
            "success": False,
        }


__all__ = ["ModelFailure"]
