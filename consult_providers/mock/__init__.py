"""Mock provider package exposing a deterministic offline adapter for tests."""

from .client import MockProvider

__all__ = ["MockProvider"]
