"""HuggingFace Inference API adapter.

Purpose:
    Run each content operation against a task-specific hosted model
    (``POST {base_url}/{model}``): summarization, token classification (NER),
    zero-shot classification and keyword extraction. Quality scoring is not
    supported.

External dependencies:
    - ``httpx`` through :class:`JsonHttpAdapter`.

Fallback semantics:
    - ``generate_keywords`` falls back to the rule-based extractor in
      ``ai_gateway.base.utils.keywords`` when the keyword model fails or
      answers in an unrecognized shape. This is the only fallback.

Usage:
    The Inference API reports no token counts; usage is estimated at four
    characters per token and priced at zero.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.errors import AdapterError, ResponseFormatError
from ..base.http.json_adapter import JsonHttpAdapter
from ..base.logging import log_event
from ..base.models import CategoryScore, ConnectionStatus, Entity, KeywordScore, ModelInfo
from ..base.tokens import UsageTally, estimate_tokens
from ..base.utils import (
    extract_keywords,
    int_option,
    min_confidence_option,
    normalize_categories,
    normalize_entities,
    normalize_keywords,
    parse_limit,
)
from ..config.defaults import HUGGINGFACE_DEFAULT_BASE_URL, HUGGINGFACE_DEFAULT_MODELS, HUGGINGFACE_TEST_MODEL

Options = Optional[Mapping[str, Any]]

MODEL_CATALOG = (
    ("gpt2", 1024, "Basic language model for text generation"),
    ("distilbert-base-uncased", 512, "Fast model for text classification"),
    ("t5-base", 512, "Versatile model for text-to-text tasks"),
)


def _flatten(response: Any) -> List[Any]:
    """Unwrap the ``[[...]]`` batch nesting some pipelines return."""
    if isinstance(response, list) and len(response) == 1 and isinstance(response[0], list):
        return response[0]
    return response if isinstance(response, list) else []


def _entity_items(response: Any) -> List[Dict[str, Any]]:
    """Map NER output (aggregated or per-token) to ``{text, type, confidence}``."""
    items: List[Dict[str, Any]] = []
    for item in _flatten(response):
        if not isinstance(item, dict):
            continue
        nested = item.get("entities")
        for entity in nested if isinstance(nested, list) else [item]:
            if not isinstance(entity, dict) or not entity.get("word"):
                continue
            items.append(
                {
                    "text": entity["word"],
                    "type": entity.get("entity_group") or entity.get("entity") or "unknown",
                    "confidence": entity.get("score"),
                }
            )
    return items


class HuggingFaceAdapter(JsonHttpAdapter):
    """Inference API adapter with per-task default models.

    Args:
        models: Overrides for the per-task default models, keyed by
            operation name (``summarize``, ``extract_entities``, ``classify``,
            ``generate_keywords``).
        **kwargs: :class:`JsonHttpAdapter` parameters.
    """

    default_base_url = HUGGINGFACE_DEFAULT_BASE_URL

    def __init__(self, *, models: Optional[Mapping[str, str]] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._models: Dict[str, str] = {**HUGGINGFACE_DEFAULT_MODELS, **dict(models or {})}
        self._usage = UsageTally()

    @property
    def provider_name(self) -> str:
        return "huggingface"

    @property
    def task_models(self) -> Dict[str, str]:
        return dict(self._models)

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}

    def _task_model(self, task: str, options: Options) -> str:
        if options and options.get("model"):
            return str(options["model"])
        return self._models[task]

    def _call(self, model: str, payload: Dict[str, Any], options: Options, input_text: str) -> Any:
        response = self._request_json("POST", f"/{model}", payload=payload, options=options)
        self._usage.add(
            {"prompt": estimate_tokens(input_text), "completion": estimate_tokens(str(response)), "total": None},
            model,
        )
        return response

    # ------------------------------------------------------------------
    # Content operations

    def summarize(self, text: str, options: Options = None) -> str:
        payload = {
            "inputs": text,
            "parameters": {
                "max_length": int_option(options, "max_length", 150),
                "min_length": int_option(options, "min_length", 30),
                "do_sample": bool((options or {}).get("do_sample")),
                "early_stopping": True,
            },
        }
        response = self._call(self._task_model("summarize", options), payload, options, text)
        first = response[0] if isinstance(response, list) and response else response
        if isinstance(first, dict):
            for key in ("summary_text", "generated_text"):
                if isinstance(first.get(key), str):
                    return first[key].strip()
        if isinstance(first, str):
            return first.strip()
        raise ResponseFormatError("Invalid response format: no summary text in reply")

    def extract_entities(self, text: str, options: Options = None) -> List[Entity]:
        payload = {"inputs": text, "parameters": {"aggregation_strategy": "simple"}}
        response = self._call(self._task_model("extract_entities", options), payload, options, text)
        return normalize_entities(
            _entity_items(response),
            min_confidence=min_confidence_option(options),
        )

    def classify(
        self,
        text: str,
        categories: Optional[Sequence[str]] = None,
        options: Options = None,
    ) -> List[CategoryScore]:
        payload: Dict[str, Any] = {"inputs": text}
        if categories:
            payload["parameters"] = {"candidate_labels": list(categories)}
        response = self._call(self._task_model("classify", options), payload, options, text)
        if isinstance(response, list) and response and isinstance(response[0], list):
            response = _flatten(response)
        return normalize_categories(response, categories)

    def generate_keywords(self, text: str, options: Options = None) -> List[KeywordScore]:
        limit = parse_limit(options)
        model = self._task_model("generate_keywords", options)
        try:
            response = self._call(model, {"inputs": text}, options, text)
        except AdapterError as exc:
            log_event(self._logger, "keywords.fallback", provider=self.provider_name, model=model, reason=exc.message)
            return extract_keywords(text, limit)
        items = [i for i in _flatten(response) if isinstance(i, dict) and i.get("word") and i.get("score") is not None]
        if not items:
            log_event(self._logger, "keywords.fallback", provider=self.provider_name, model=model, reason="unrecognized reply")
            return extract_keywords(text, limit)
        return normalize_keywords([{"keyword": i["word"], "score": i["score"]} for i in items], limit)

    # ------------------------------------------------------------------
    # Meta operations

    def test_connection(self, options: Options = None) -> ConnectionStatus:
        if not self._api_key:
            return ConnectionStatus(False, "API key is missing", {})
        try:
            self._request_json("POST", f"/{HUGGINGFACE_TEST_MODEL}", payload={"inputs": "Hello, testing!"}, options=options)
        except AdapterError as exc:
            return ConnectionStatus(False, f"Connection failed: {exc.message}", {"status_code": exc.status_code})
        return ConnectionStatus(True, "Connection successful", {"status_code": 200, "model": HUGGINGFACE_TEST_MODEL})

    def get_models(self) -> List[ModelInfo]:
        return [
            ModelInfo(
                id=model_id,
                name=model_id,
                provider=self.provider_name,
                context_length=max_tokens,
                capabilities={"description": description, "cost_per_1k_tokens": {"input": 0.0, "output": 0.0}},
            )
            for model_id, max_tokens, description in MODEL_CATALOG
        ]

    def get_usage_info(self) -> Dict[str, Any]:
        info = self._usage.to_dict()
        info["estimated"] = True
        return info


__all__ = ["HuggingFaceAdapter", "MODEL_CATALOG"]
