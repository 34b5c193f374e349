"""Reply parsing helpers shared by the adapters."""

from .json_repair import attempt_json_repair, clean_json_markers, parse_json_reply
from .keywords import extract_keywords
from .normalizers import (
    clamp,
    int_option,
    min_confidence_option,
    normalize_categories,
    normalize_entities,
    normalize_keywords,
    normalize_quality,
    parse_limit,
)

__all__ = [
    "attempt_json_repair",
    "clean_json_markers",
    "parse_json_reply",
    "extract_keywords",
    "clamp",
    "int_option",
    "min_confidence_option",
    "normalize_categories",
    "normalize_entities",
    "normalize_keywords",
    "normalize_quality",
    "parse_limit",
]
