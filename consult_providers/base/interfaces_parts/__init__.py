"""Protocols split into single-class modules; import from ``base.interfaces``."""

from .completion_provider import CompletionProvider

__all__ = ["CompletionProvider"]
