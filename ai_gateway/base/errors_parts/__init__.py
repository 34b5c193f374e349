"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `ai_gateway.base.errors` for the stable surface.
"""

from .error_level import ErrorLevel
from .classified_error import ClassifiedError
from .gateway_error import GatewayError
from .adapter_error import AdapterError
from .response_format_error import ResponseFormatError
from .unsupported_operation_error import UnsupportedOperationError
from .unknown_provider_error import UnknownProviderError
from .no_provider_available_error import NoProviderAvailableError
from .invalid_provider_error import InvalidProviderError
from .raw_failure import RawFailure
from .classification import describe_failure

__all__ = [
    "ErrorLevel",
    "ClassifiedError",
    "GatewayError",
    "AdapterError",
    "ResponseFormatError",
    "UnsupportedOperationError",
    "UnknownProviderError",
    "NoProviderAvailableError",
    "InvalidProviderError",
    "RawFailure",
    "describe_failure",
]
