"""consult_providers package

Send one prompt to several independently configured AI completion providers
at once and collect every answer as a single ordered batch.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ConsultError`, :class:`ErrorCode`,
      :class:`ValidationError`, :class:`CatalogConfigurationError`
    - Core: :class:`Dispatcher`, :func:`build_dispatcher`,
      :class:`ModelCatalog`, :class:`ProviderFactory`
    - Data: :class:`ChatResponseBatch`, :class:`ModelSuccess`,
      :class:`ModelFailure`, :class:`ModelDescriptor`, :class:`ProviderConfig`
"""

from .base.catalog import ModelCatalog
from .base.errors import (
    CatalogConfigurationError,
    ConsultError,
    ErrorCode,
    ValidationError,
)
from .base.factory import ProviderFactory
from .base.models import (
    ChatResponseBatch,
    ModelDescriptor,
    ModelFailure,
    ModelSuccess,
    ProviderConfig,
)
from .dispatch import Dispatcher, build_dispatcher

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CatalogConfigurationError",
    "ChatResponseBatch",
    "ConsultError",
    "Dispatcher",
    "ErrorCode",
    "ModelCatalog",
    "ModelDescriptor",
    "ModelFailure",
    "ModelSuccess",
    "ProviderConfig",
    "ProviderFactory",
    "ValidationError",
    "build_dispatcher",
]
