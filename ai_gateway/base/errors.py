"""Unified gateway error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``ai_gateway.base.errors_parts`` to maintain a stable import path while
keeping each type in its own module.
"""

from .errors_parts.error_level import ErrorLevel
from .errors_parts.classified_error import ClassifiedError
from .errors_parts.gateway_error import GatewayError
from .errors_parts.adapter_error import AdapterError
from .errors_parts.response_format_error import ResponseFormatError
from .errors_parts.unsupported_operation_error import UnsupportedOperationError
from .errors_parts.unknown_provider_error import UnknownProviderError
from .errors_parts.no_provider_available_error import NoProviderAvailableError
from .errors_parts.invalid_provider_error import InvalidProviderError
from .errors_parts.raw_failure import RawFailure
from .errors_parts.classification import describe_failure

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
