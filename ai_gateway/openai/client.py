"""OpenAI adapter over the Chat Completions REST API.

Purpose:
    Implement every content operation as a chat completion against
    ``/chat/completions``; structured operations request
    ``response_format={"type": "json_object"}``.

External dependencies:
    - ``httpx`` through :class:`JsonHttpAdapter` (no SDK; the gateway owns
      retries, logging and cancellation).

Connection test:
    ``GET /models``; success when the listing returns 200. Failures are
    captured into the returned :class:`ConnectionStatus`.

Usage:
    Token counts come from each reply's ``usage`` block; cost is estimated
    from ``MODEL_COSTS``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.errors import AdapterError, ResponseFormatError
from ..base.http.chat_adapter import ChatModelAdapter
from ..base.models import ConnectionStatus, ModelInfo
from ..base.tokens import extract_openai_token_usage
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_DEFAULT_MODEL

# USD per 1K tokens (input, output)
MODEL_COSTS: Dict[str, tuple] = {
    "gpt-3.5-turbo": (0.0005, 0.0015),
    "gpt-4": (0.03, 0.06),
    "gpt-4-turbo": (0.01, 0.03),
    "gpt-4o": (0.0025, 0.01),
    "gpt-4o-mini": (0.00015, 0.0006),
}


class OpenAIAdapter(ChatModelAdapter):
    """OpenAI chat-completions adapter."""

    default_base_url = OPENAI_DEFAULT_BASE_URL
    default_model = OPENAI_DEFAULT_MODEL
    model_costs = MODEL_COSTS

    @property
    def provider_name(self) -> str:
        return "openai"

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}

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
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": text},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        data = self._request_json("POST", "/chat/completions", payload=payload, options=options)
        self._usage.add(extract_openai_token_usage(data), model)
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ResponseFormatError("Invalid response format: no message content in completion") from exc
        if not isinstance(content, str):
            raise ResponseFormatError("Invalid response format: message content is not text")
        return content

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
                name=str(item["id"]),
                provider=self.provider_name,
                capabilities={"owned_by": item.get("owned_by")} if item.get("owned_by") else {},
            )
            for item in entries
            if isinstance(item, dict) and item.get("id")
        ]


__all__ = ["OpenAIAdapter", "MODEL_COSTS"]
