"""Capability names.

Detection helpers live in :mod:`ai_gateway.base.capabilities.core`; they
depend on the adapter contract, which itself imports the names below, so
they are not re-exported here.
"""

from .operations import (
    ALL_OPERATIONS,
    CONTENT_OPERATIONS,
    META_OPERATIONS,
    OPERATION_ALIASES,
    OPERATION_LABELS,
    OP_CLASSIFY,
    OP_EXTRACT_ENTITIES,
    OP_GENERATE_KEYWORDS,
    OP_GET_CAPABILITIES,
    OP_GET_MODELS,
    OP_GET_USAGE_INFO,
    OP_QUALITY_SCORE,
    OP_SUMMARIZE,
    OP_TEST_CONNECTION,
    normalize_operation,
)

__all__ = [
    "ALL_OPERATIONS",
    "CONTENT_OPERATIONS",
    "META_OPERATIONS",
    "OPERATION_ALIASES",
    "OPERATION_LABELS",
    "OP_CLASSIFY",
    "OP_EXTRACT_ENTITIES",
    "OP_GENERATE_KEYWORDS",
    "OP_GET_CAPABILITIES",
    "OP_GET_MODELS",
    "OP_GET_USAGE_INFO",
    "OP_QUALITY_SCORE",
    "OP_SUMMARIZE",
    "OP_TEST_CONNECTION",
    "normalize_operation",
]
