"""Token usage extraction and accumulation."""

from .extraction import (
    PLACEHOLDER_USAGE,
    CanonicalUsage,
    estimate_tokens,
    extract_anthropic_token_usage,
    extract_openai_token_usage,
)
from .usage_tally import CostTable, UsageTally

__all__ = [
    "PLACEHOLDER_USAGE",
    "CanonicalUsage",
    "estimate_tokens",
    "extract_anthropic_token_usage",
    "extract_openai_token_usage",
    "CostTable",
    "UsageTally",
]
