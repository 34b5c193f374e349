"""Canonical operation names, display labels and accepted aliases.

Kept free of imports so both the adapter contract and the detection helpers
can depend on it.
"""

from __future__ import annotations

from typing import Dict, Tuple

# String constants (avoid Enum overhead for simple set operations)
OP_SUMMARIZE = "summarize"
OP_EXTRACT_ENTITIES = "extract_entities"
OP_CLASSIFY = "classify"
OP_GENERATE_KEYWORDS = "generate_keywords"
OP_QUALITY_SCORE = "calculate_quality_score"

OP_TEST_CONNECTION = "test_connection"
OP_GET_CAPABILITIES = "get_capabilities"
OP_GET_MODELS = "get_models"
OP_GET_USAGE_INFO = "get_usage_info"

CONTENT_OPERATIONS: Tuple[str, ...] = (
    OP_SUMMARIZE,
    OP_EXTRACT_ENTITIES,
    OP_CLASSIFY,
    OP_GENERATE_KEYWORDS,
    OP_QUALITY_SCORE,
)

META_OPERATIONS: Tuple[str, ...] = (
    OP_TEST_CONNECTION,
    OP_GET_CAPABILITIES,
    OP_GET_MODELS,
    OP_GET_USAGE_INFO,
)

ALL_OPERATIONS: Tuple[str, ...] = CONTENT_OPERATIONS + META_OPERATIONS

OPERATION_LABELS: Dict[str, str] = {
    OP_SUMMARIZE: "Content Summarization",
    OP_EXTRACT_ENTITIES: "Entity Extraction",
    OP_CLASSIFY: "Content Classification",
    OP_GENERATE_KEYWORDS: "Keyword Generation",
    OP_QUALITY_SCORE: "Quality Scoring",
}

OPERATION_ALIASES: Dict[str, str] = {
    "score_quality": OP_QUALITY_SCORE,
    "quality_score": OP_QUALITY_SCORE,
    "keywords": OP_GENERATE_KEYWORDS,
    "entities": OP_EXTRACT_ENTITIES,
}


def normalize_operation(name: str) -> str:
    """Return the canonical operation name for ``name``.

    Case and surrounding whitespace are ignored; ``-`` is treated as ``_``.

    Raises:
        ValueError: ``name`` is neither a canonical operation nor an alias.
    """
    key = (name or "").strip().lower().replace("-", "_")
    key = OPERATION_ALIASES.get(key, key)
    if key not in ALL_OPERATIONS:
        raise ValueError(f"Unknown operation '{name}'")
    return key


__all__ = [
    "OP_SUMMARIZE",
    "OP_EXTRACT_ENTITIES",
    "OP_CLASSIFY",
    "OP_GENERATE_KEYWORDS",
    "OP_QUALITY_SCORE",
    "OP_TEST_CONNECTION",
    "OP_GET_CAPABILITIES",
    "OP_GET_MODELS",
    "OP_GET_USAGE_INFO",
    "CONTENT_OPERATIONS",
    "META_OPERATIONS",
    "ALL_OPERATIONS",
    "OPERATION_LABELS",
    "OPERATION_ALIASES",
    "normalize_operation",
]
