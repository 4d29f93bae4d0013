"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `consult_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .consult_error import (
    AdapterError,
    AggregationError,
    CatalogConfigurationError,
    ConsultError,
    ProviderCallError,
    TransportError,
    UnknownModelError,
    UnknownProviderError,
    ValidationError,
)
from .classification import classify_exception, classify_status

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
