"""
Provider-agnostic interfaces for the adapter layer.

Re-exports the Protocols under ``consult_providers.base.interfaces_parts``
to keep imports stable for upstream code.
"""

from __future__ import annotations

from .interfaces_parts import CompletionProvider

__all__ = ["CompletionProvider"]
