"""
Per-provider error code tables.

Each table maps a level to an ordered ``code -> description`` mapping. Order
matters: the first code of a level is the fallback when neither a structured
provider code nor a description substring matches. Provider ids without a
table (or without codes for a level) fall back to ``GENERIC_CODES``.

``PROVIDER_CODE_ALIASES`` maps structured codes found in provider error
payloads (``error.code`` / ``error.type``) to the canonical codes below.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

from ..errors import ErrorLevel

CodeTable = Mapping[ErrorLevel, Mapping[str, str]]

GENERIC_PROVIDER = "generic"
UNKNOWN_ERROR_CODE = "unknown_error"


def _freeze(table: Dict[ErrorLevel, Dict[str, str]]) -> CodeTable:
    return MappingProxyType({level: MappingProxyType(dict(codes)) for level, codes in table.items()})


OPENAI_CODES = _freeze(
    {
        ErrorLevel.NETWORK: {
            "timeout": "Connection timed out",
            "dns_failure": "DNS resolution failed",
            "unreachable": "API endpoint unreachable",
            "ssl_error": "SSL certificate error",
        },
        ErrorLevel.AUTH: {
            "invalid_api_key": "Invalid API key",
            "expired_api_key": "API key expired",
            "insufficient_permissions": "Insufficient permissions",
            "rate_limit_exceeded": "Rate limit exceeded",
        },
        ErrorLevel.REQUEST: {
            "invalid_params": "Invalid parameters",
            "malformed_request": "Malformed request",
            "unsupported_model": "Unsupported model specified",
            "invalid_content_type": "Invalid content type",
            "unsupported_operation": "Unsupported operation",
        },
        ErrorLevel.PROVIDER: {
            "model_overloaded": "Model currently overloaded",
            "content_policy_violation": "Content policy violation",
            "quota_exceeded": "Usage quota exceeded",
            "content_filtered": "Content filtered by safety system",
        },
        ErrorLevel.RESPONSE: {
            "invalid_response_format": "Invalid response format",
            "parse_error": "Failed to parse response",
            "missing_fields": "Missing required fields in response",
            "unexpected_response": "Unexpected response from provider",
        },
    }
)

ANTHROPIC_CODES = _freeze(
    {
        ErrorLevel.NETWORK: {
            "timeout": "Connection timed out",
            "unreachable": "API endpoint unreachable",
            "connection_error": "Connection error",
        },
        ErrorLevel.AUTH: {
            "invalid_api_key": "Invalid x-api-key",
            "insufficient_permissions": "Permission denied",
            "rate_limit_exceeded": "Rate limit exceeded",
        },
        ErrorLevel.REQUEST: {
            "invalid_params": "Invalid request",
            "unsupported_model": "Model not found",
            "request_too_large": "Request exceeds the maximum allowed size",
            "unsupported_operation": "Unsupported operation",
        },
        ErrorLevel.PROVIDER: {
            "model_overloaded": "Overloaded",
            "service_error": "Internal server error",
            "quota_exceeded": "Credit balance is too low",
            "content_policy_violation": "Content policy violation",
        },
        ErrorLevel.RESPONSE: {
            "invalid_response_format": "Invalid response format",
            "parse_error": "Failed to parse response",
            "missing_fields": "Missing required fields in response",
        },
    }
)

HUGGINGFACE_CODES = _freeze(
    {
        ErrorLevel.NETWORK: {
            "timeout": "Connection timed out",
            "unreachable": "API endpoint unreachable",
            "connection_error": "Connection error",
        },
        ErrorLevel.AUTH: {
            "invalid_api_key": "Invalid credentials",
            "insufficient_permissions": "Access to model is restricted",
            "rate_limit_exceeded": "Rate limit reached",
        },
        ErrorLevel.REQUEST: {
            "invalid_params": "Invalid parameters",
            "unsupported_model": "Model not found",
            "unsupported_operation": "Unsupported operation",
        },
        ErrorLevel.PROVIDER: {
            "model_loading": "is currently loading",
            "service_error": "Service error",
            "quota_exceeded": "exceeded your monthly included credits",
        },
        ErrorLevel.RESPONSE: {
            "invalid_response_format": "Invalid response format",
            "parse_error": "Failed to parse response",
            "unexpected_response": "Unexpected response from provider",
        },
    }
)

GENERIC_CODES = _freeze(
    {
        ErrorLevel.NETWORK: {
            "timeout": "Connection timed out",
            "dns_failure": "DNS resolution failed",
            "unreachable": "API endpoint unreachable",
            "connection_error": "Connection error",
            "http_error": "HTTP error",
        },
        ErrorLevel.AUTH: {
            "auth_error": "Authentication error",
            "unauthorized": "Unauthorized access",
            "forbidden": "Access forbidden",
            "rate_limit": "Rate limit exceeded",
        },
        ErrorLevel.REQUEST: {
            "bad_request": "Bad request",
            "invalid_input": "Invalid input",
            "validation_error": "Validation error",
            "unsupported_operation": "Unsupported operation",
        },
        ErrorLevel.PROVIDER: {
            "service_error": "Service error",
            "quota_exceeded": "Quota exceeded",
            "content_policy": "Content policy violation",
            "service_unavailable": "Service temporarily unavailable",
        },
        ErrorLevel.RESPONSE: {
            "parse_error": "Response parse error",
            "invalid_response": "Invalid response",
            "incomplete_response": "Incomplete response",
            "unexpected_response": "Unexpected response",
        },
    }
)

PROVIDER_CODES: Mapping[str, CodeTable] = MappingProxyType(
    {
        "openai": OPENAI_CODES,
        "anthropic": ANTHROPIC_CODES,
        "huggingface": HUGGINGFACE_CODES,
        GENERIC_PROVIDER: GENERIC_CODES,
    }
)

PROVIDER_CODE_ALIASES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "openai": MappingProxyType(
            {
                "insufficient_quota": "quota_exceeded",
                "model_not_found": "unsupported_model",
                "content_filter": "content_filtered",
                "invalid_request_error": "invalid_params",
                "rate_limit_error": "rate_limit_exceeded",
                "server_error": "model_overloaded",
            }
        ),
        "anthropic": MappingProxyType(
            {
                "authentication_error": "invalid_api_key",
                "permission_error": "insufficient_permissions",
                "rate_limit_error": "rate_limit_exceeded",
                "invalid_request_error": "invalid_params",
                "not_found_error": "unsupported_model",
                "request_too_large": "request_too_large",
                "overloaded_error": "model_overloaded",
                "api_error": "service_error",
            }
        ),
        GENERIC_PROVIDER: MappingProxyType(
            {
                "rate_limit_exceeded": "rate_limit",
                "unauthorized": "unauthorized",
                "forbidden": "forbidden",
            }
        ),
    }
)

# Codes that mark a permanent Provider-level rejection (no retry).
PERMANENT_PROVIDER_CODES = frozenset(
    {"quota_exceeded", "content_policy_violation", "content_policy", "content_filtered"}
)

# Auth-level codes that are transient (retry after waiting).
RATE_LIMIT_CODES = frozenset({"rate_limit_exceeded", "rate_limit"})


__all__ = [
    "CodeTable",
    "GENERIC_PROVIDER",
    "UNKNOWN_ERROR_CODE",
    "OPENAI_CODES",
    "ANTHROPIC_CODES",
    "HUGGINGFACE_CODES",
    "GENERIC_CODES",
    "PROVIDER_CODES",
    "PROVIDER_CODE_ALIASES",
    "PERMANENT_PROVIDER_CODES",
    "RATE_LIMIT_CODES",
]
