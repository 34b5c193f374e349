"""Anthropic adapter over the Messages REST API.

Purpose:
    Implement every content operation as one ``POST /messages`` exchange
    with the instruction in the top-level ``system`` field. The API has no
    JSON response mode, so structured prompts demand bare JSON and replies
    go through lenient JSON parsing.

External dependencies:
    - ``httpx`` through :class:`JsonHttpAdapter`.

Headers:
    ``x-api-key`` and ``anthropic-version`` on every request.

Connection test:
    ``GET /models``; failures are captured into the returned
    :class:`ConnectionStatus`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.errors import AdapterError, ResponseFormatError
from ..base.http.chat_adapter import ChatModelAdapter
from ..base.models import ConnectionStatus, ModelInfo
from ..base.tokens import extract_anthropic_token_usage
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_BASE_URL, ANTHROPIC_DEFAULT_MODEL

# USD per 1K tokens (input, output)
MODEL_COSTS: Dict[str, tuple] = {
    "claude-3-haiku": (0.00025, 0.00125),
    "claude-3-5-haiku": (0.0008, 0.004),
    "claude-3-sonnet": (0.003, 0.015),
    "claude-3-5-sonnet": (0.003, 0.015),
    "claude-3-opus": (0.015, 0.075),
}


class AnthropicAdapter(ChatModelAdapter):
    """Anthropic Messages API adapter."""

    default_base_url = ANTHROPIC_DEFAULT_BASE_URL
    default_model = ANTHROPIC_DEFAULT_MODEL
    strict_json_prompts = True
    model_costs = MODEL_COSTS

    def __init__(self, *, api_version: str = ANTHROPIC_API_VERSION, **kwargs: Any) -> None:
        self._api_version = api_version
        super().__init__(**kwargs)

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def _auth_headers(self) -> Dict[str, str]:
        headers = {"anthropic-version": self._api_version}
        if self._api_key:
            headers["x-api-key"] = self._api_key
        return headers

    def _complete(
        self,
        system: str,
        text: str,
        options: Optional[Mapping[str, Any]],
        *,
        max_tokens: int,
        temperature: float,
        json_mode: bool = False,
    ) -> str:
        self._require_api_key()
        model = self._model_for(options)
        payload = {
            "model": model,
            "system": system,
            "messages": [{"role": "user", "content": text}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        data = self._request_json("POST", "/messages", payload=payload, options=options)
        self._usage.add(extract_anthropic_token_usage(data), model)
        blocks = data.get("content") if isinstance(data, dict) else None
        if not isinstance(blocks, list):
            raise ResponseFormatError("Invalid response format: message has no content blocks")
        texts = [b.get("text", "") for b in blocks if isinstance(b, dict) and b.get("type", "text") == "text"]
        if not texts:
            raise ResponseFormatError("Invalid response format: message has no text content")
        return "".join(texts)

    def test_connection(self, options: Optional[Mapping[str, Any]] = None) -> ConnectionStatus:
        if not self._api_key:
            return ConnectionStatus(False, "API key is missing", {})
        try:
            data = self._request_json("GET", "/models", options=options)
        except AdapterError as exc:
            return ConnectionStatus(False, f"Connection failed: {exc.message}", {"status_code": exc.status_code})
        models = data.get("data") if isinstance(data, dict) else None
        return ConnectionStatus(
            True,
            "Connection successful",
            {"status_code": 200, "model_count": len(models) if isinstance(models, list) else 0},
        )

    def get_models(self) -> List[ModelInfo]:
        self._require_api_key()
        data = self._request_json("GET", "/models")
        entries = data.get("data") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ResponseFormatError("Invalid response format: model listing has no 'data' array")
        return [
            ModelInfo(
                id=str(item["id"]),
                name=str(item.get("display_name") or item["id"]),
                provider=self.provider_name,
                updated_at=item.get("created_at"),
            )
            for item in entries
            if isinstance(item, dict) and item.get("id")
        ]


__all__ = ["AnthropicAdapter", "MODEL_COSTS"]
