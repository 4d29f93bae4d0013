"""
Structured exception types for the consultation core.

Every error carries a normalized :class:`ErrorCode` plus a human-readable
message suitable for returning to callers. Provider-bound errors additionally
carry the provider id and model key they originated from.

Propagation policy:
    - ``ValidationError`` and ``CatalogConfigurationError`` fail a whole
      operation (a consultation request or process startup).
    - Every other error is recovered by the dispatcher into a failure outcome
      for the single model it concerns.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode


class ConsultError(Exception):
    """Base class for all consultation errors.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message.
    """

    default_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, code: Optional[ErrorCode] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class ValidationError(ConsultError):
    """Raised when a consultation request is malformed (empty prompt or model set)."""

    default_code = ErrorCode.VALIDATION


class UnknownProviderError(ConsultError):
    """Raised when an addressable id references a provider absent from configuration.

    Also raised by :class:`~consult_providers.base.factory.ProviderFactory`
    when no adapter implementation is registered for a provider id.
    """

    default_code = ErrorCode.UNKNOWN_PROVIDER


class UnknownModelError(ConsultError):
    """Raised when a configured provider does not list the requested model key."""

    default_code = ErrorCode.UNKNOWN_MODEL


class CatalogConfigurationError(ConsultError):
    """Fatal, startup-time only: the model catalog cannot be built."""

    default_code = ErrorCode.CONFIGURATION


class AggregationError(ConsultError):
    """Raised when settled outcomes do not line up with the requested ids."""

    default_code = ErrorCode.INTERNAL


class ProviderCallError(ConsultError):
    """Base for failures of a single outbound provider call.

    Attributes:
        provider: Provider id where the error originated (e.g. ``"openai"``).
        model: Model key the call was made for.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        code: Optional[ErrorCode] = None,
    ) -> None:
        super().__init__(message, code=code)
        self.provider = provider
        self.model = model


class AdapterError(ProviderCallError):
    """The provider answered with a non-success status or an unusable payload.

    ``message`` is the provider's own error text when available.
    """

    default_code = ErrorCode.BAD_RESPONSE

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        model: Optional[str] = None,
        status: Optional[int] = None,
        code: Optional[ErrorCode] = None,
    ) -> None:
        super().__init__(message, provider=provider, model=model, code=code)
        self.status = status


class TransportError(ProviderCallError):
    """The network call itself could not complete (DNS, reset, transport timeout)."""

    default_code = ErrorCode.TRANSPORT


__all__ = [
    "ConsultError",
    "ValidationError",
    "UnknownProviderError",
    "UnknownModelError",
    "CatalogConfigurationError",
    "AggregationError",
    "ProviderCallError",
    "AdapterError",
    "TransportError",
]
