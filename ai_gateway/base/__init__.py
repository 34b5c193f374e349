"""
Gateway Base Package

Exports the provider-agnostic contract, result models, error taxonomy,
cancellation primitives and the provider factory used by concrete adapters
and the service layer.

- Interfaces: the ``ProviderAdapter`` contract every provider implements
- Models: serialization-friendly result objects
- Errors: the five-tier classification surface
- Factory: lazy creation of provider adapters by canonical name
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    AdapterError,
    ClassifiedError,
    ErrorLevel,
    GatewayError,
    InvalidProviderError,
    NoProviderAvailableError,
    ResponseFormatError,
    UnknownProviderError,
    UnsupportedOperationError,
)
from .factory import ProviderFactory, create_adapter
from .interfaces import ProviderAdapter
from .models import (
    Capabilities,
    CategoryScore,
    ConnectionStatus,
    Entity,
    KeywordScore,
    ModelInfo,
    QualityScore,
)

__all__ = [
    "CancellationToken",
    "CancelledError",
    "AdapterError",
    "ClassifiedError",
    "ErrorLevel",
    "GatewayError",
    "InvalidProviderError",
    "NoProviderAvailableError",
    "ResponseFormatError",
    "UnknownProviderError",
    "UnsupportedOperationError",
    "ProviderFactory",
    "create_adapter",
    "ProviderAdapter",
    "Capabilities",
    "CategoryScore",
    "ConnectionStatus",
    "Entity",
    "KeywordScore",
    "ModelInfo",
    "QualityScore",
]
