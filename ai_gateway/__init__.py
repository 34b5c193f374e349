"""ai_gateway package

One resilient interface over heterogeneous AI content-processing providers.

Purpose:
    Unify provider APIs (OpenAI-style, Anthropic-style, HuggingFace-style and
    an offline mock) behind one adapter contract, classify failures into five
    tiers, probe provider health with retries, and keep a redacted
    request/response trail for diagnosis.

Public API (re-exported):
    - Version: ``__version__``
    - Service: :class:`ServiceManager`, :func:`build_service_manager`
    - Diagnostics: :class:`ErrorClassifier`, :class:`RequestLogger`,
      :class:`ConnectionTester`
    - Contract and models: :class:`ProviderAdapter` and the result types
    - Errors: :class:`GatewayError`, :class:`ClassifiedError`, :class:`ErrorLevel`
    - Factory: :class:`ProviderFactory`, :func:`create_adapter`
    - Settings: :func:`load_settings`, :class:`GatewaySettings`
"""

from .base import (
    AdapterError,
    CancellationToken,
    CancelledError,
    Capabilities,
    CategoryScore,
    ClassifiedError,
    ConnectionStatus,
    Entity,
    ErrorLevel,
    GatewayError,
    InvalidProviderError,
    KeywordScore,
    ModelInfo,
    NoProviderAvailableError,
    ProviderAdapter,
    ProviderFactory,
    QualityScore,
    ResponseFormatError,
    UnknownProviderError,
    UnsupportedOperationError,
    create_adapter,
)
from .base.diagnostics import ConnectionTester, ErrorClassifier, RequestLogger, TestResult
from .config import GatewaySettings, ProviderSettings, load_settings
from .service import ServiceManager, build_service_manager

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AdapterError",
    "CancellationToken",
    "CancelledError",
    "Capabilities",
    "CategoryScore",
    "ClassifiedError",
    "ConnectionStatus",
    "Entity",
    "ErrorLevel",
    "GatewayError",
    "InvalidProviderError",
    "KeywordScore",
    "ModelInfo",
    "NoProviderAvailableError",
    "ProviderAdapter",
    "ProviderFactory",
    "QualityScore",
    "ResponseFormatError",
    "UnknownProviderError",
    "UnsupportedOperationError",
    "create_adapter",
    "ConnectionTester",
    "ErrorClassifier",
    "RequestLogger",
    "TestResult",
    "GatewaySettings",
    "ProviderSettings",
    "load_settings",
    "ServiceManager",
    "build_service_manager",
]
