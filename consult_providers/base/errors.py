"""Unified consultation error taxonomy public surface.

This module re-exports the implementations under
``consult_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    AdapterError,
    AggregationError,
    CatalogConfigurationError,
    ConsultError,
    ErrorCode,
    ProviderCallError,
    TransportError,
    UnknownModelError,
    UnknownProviderError,
    ValidationError,
    classify_exception,
    classify_status,
)

__all__ = [
    "ErrorCode",
    "ConsultError",
    "ValidationError",
    "UnknownProviderError",
    "UnknownModelError",
    "CatalogConfigurationError",
    "AggregationError",
    "ProviderCallError",
    "AdapterError",
    "TransportError",
    "classify_exception",
    "classify_status",
]
