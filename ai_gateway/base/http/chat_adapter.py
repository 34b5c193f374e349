"""Shared base for adapters backed by a chat-completion model.

Every content operation is one prompt/reply exchange: the subclass sends a
system instruction plus the input text through ``_complete`` and receives
the reply text; this base turns structured replies into gateway result
models with the lenient JSON parsing from ``ai_gateway.base.utils``.

Subclasses implement ``_complete``, ``test_connection`` and ``get_models``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..errors import AdapterError, ErrorLevel
from ..models import CategoryScore, Entity, KeywordScore, QualityScore
from ..prompts import (
    SUMMARY_SYSTEM_PROMPT,
    classify_prompt,
    entity_prompt,
    keywords_prompt,
    quality_prompt,
)
from ..tokens import CostTable, UsageTally
from ..utils import (
    int_option,
    min_confidence_option,
    normalize_categories,
    normalize_entities,
    normalize_keywords,
    normalize_quality,
    parse_json_reply,
    parse_limit,
)
from .json_adapter import JsonHttpAdapter

Options = Optional[Mapping[str, Any]]


class ChatModelAdapter(JsonHttpAdapter):
    """Content operations implemented as chat prompts.

    Class attributes:
        strict_json_prompts: Append "no text outside the JSON" to prompts
            (for APIs without a JSON response mode).
        model_costs: Per-model ``(input, output)`` USD price per 1K tokens
            used for the usage estimate.
    """

    strict_json_prompts: bool = False
    model_costs: CostTable = {}

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._usage = UsageTally(self.model_costs)

    def _require_api_key(self) -> None:
        if not self._api_key:
            raise AdapterError(
                f"{self.provider_name} API key is missing",
                provider_code="invalid_api_key",
                level_hint=ErrorLevel.AUTH,
            )

    @abstractmethod
    def _complete(
        self,
        system: str,
        text: str,
        options: Options,
        *,
        max_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        """Send one system+user exchange and return the reply text."""

    def _complete_json(self, system: str, text: str, options: Options, *, max_tokens: int) -> Any:
        reply = self._complete(system, text, options, max_tokens=max_tokens, temperature=0.3, json_mode=True)
        return parse_json_reply(reply)

    # ------------------------------------------------------------------
    # Content operations

    def summarize(self, text: str, options: Options = None) -> str:
        max_tokens = int_option(options, "max_tokens", 150)
        reply = self._complete(SUMMARY_SYSTEM_PROMPT, text, options, max_tokens=max_tokens, temperature=0.5)
        return reply.strip()

    def extract_entities(self, text: str, options: Options = None) -> List[Entity]:
        entity_types = (options or {}).get("entity_types")
        system = entity_prompt(entity_types, strict=self.strict_json_prompts)
        payload = self._complete_json(system, text, options, max_tokens=int_option(options, "max_tokens", 1000))
        return normalize_entities(payload, min_confidence=min_confidence_option(options))

    def classify(
        self,
        text: str,
        categories: Optional[Sequence[str]] = None,
        options: Options = None,
    ) -> List[CategoryScore]:
        system = classify_prompt(categories, strict=self.strict_json_prompts)
        payload = self._complete_json(system, text, options, max_tokens=int_option(options, "max_tokens", 500))
        return normalize_categories(payload, categories)

    def generate_keywords(self, text: str, options: Options = None) -> List[KeywordScore]:
        limit = parse_limit(options)
        system = keywords_prompt(limit, strict=self.strict_json_prompts)
        payload = self._complete_json(system, text, options, max_tokens=int_option(options, "max_tokens", 500))
        return normalize_keywords(payload, limit)

    def calculate_quality_score(self, text: str, options: Options = None) -> QualityScore:
        system = quality_prompt(strict=self.strict_json_prompts)
        payload = self._complete_json(system, text, options, max_tokens=int_option(options, "max_tokens", 500))
        return normalize_quality(payload)

    # ------------------------------------------------------------------
    # Meta operations

    def get_usage_info(self) -> Dict[str, Any]:
        info = self._usage.to_dict()
        info["model"] = self._model
        return info


__all__ = ["ChatModelAdapter"]
