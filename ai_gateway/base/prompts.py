"""Prompt templates shared by the chat-model adapters.

OpenAI and Anthropic answer the same structured tasks; the instructions
differ only in how strictly they demand bare JSON (Anthropic has no JSON
response mode, so its prompts forbid surrounding prose).
"""
from __future__ import annotations

from typing import Optional, Sequence

DEFAULT_ENTITY_TYPES = ("person", "organization", "location", "date", "product")

SUMMARY_SYSTEM_PROMPT = (
    "You are a professional summarizer. Create a concise and accurate summary of the following text."
)

_STRICT_JSON = " Do not include any explanation or text outside the JSON."


def entity_prompt(entity_types: Optional[Sequence[str]] = None, *, strict: bool = False) -> str:
    types = ", ".join(entity_types or DEFAULT_ENTITY_TYPES)
    prompt = (
        "Extract entities from the following text. For each entity, provide the entity text, "
        f"its type (limited to: {types}), and a confidence score between 0 and 1. "
        "Return the result as a JSON object with an 'entities' array of objects with "
        "'entity', 'type', and 'confidence' properties."
    )
    return prompt + _STRICT_JSON if strict else prompt


def classify_prompt(categories: Optional[Sequence[str]] = None, *, strict: bool = False) -> str:
    if categories:
        prompt = (
            f"Classify the following text into one or more of these categories: {', '.join(categories)}. "
            "For each matching category, provide a confidence score between 0 and 1. "
            "Return the result as a JSON object with a 'categories' array of objects with "
            "'category' and 'confidence' properties, sorted by confidence score in descending order."
        )
    else:
        prompt = (
            "Classify the following text. Determine the most appropriate category and provide a "
            "confidence score between 0 and 1. Return the result as a JSON object with 'category' "
            "and 'confidence' properties."
        )
    return prompt + _STRICT_JSON if strict else prompt


def keywords_prompt(limit: int, *, strict: bool = False) -> str:
    prompt = (
        f"Extract up to {limit} keywords or key phrases from the following text. For each keyword, "
        "provide the keyword text and a relevance score between 0 and 1. Return the result as a "
        "JSON object with a 'keywords' array of objects with 'keyword' and 'score' properties, "
        "sorted by score in descending order."
    )
    return prompt + _STRICT_JSON if strict else prompt


def quality_prompt(*, strict: bool = False) -> str:
    prompt = (
        "Analyze the following text and rate its quality from 0 to 100. Include scores from 0 to 100 "
        "for readability, engagement, coherence, and relevance, and up to three concrete suggestions "
        "for improvement. Return the result as a JSON object with 'score', 'breakdown' (an object "
        "mapping each dimension to its score), and 'suggestions' (an array of strings) properties."
    )
    return prompt + _STRICT_JSON if strict else prompt


__all__ = [
    "DEFAULT_ENTITY_TYPES",
    "SUMMARY_SYSTEM_PROMPT",
    "entity_prompt",
    "classify_prompt",
    "keywords_prompt",
    "quality_prompt",
]
