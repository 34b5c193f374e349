"""OpenAIAdapter over a mocked Chat Completions endpoint."""
from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from ai_gateway.base.diagnostics import REDACTED
from ai_gateway.base.errors import AdapterError, ErrorLevel, ResponseFormatError
from ai_gateway.openai import OpenAIAdapter

from .utils import json_transport


def completion(content: str, prompt_tokens: int = 10, completion_tokens: int = 5) -> dict:
    return {
        "id": "chatcmpl-1",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }


def make_adapter(handler, calls=None, request_logger=None, **kwargs) -> OpenAIAdapter:
    kwargs.setdefault("api_key", "sk-test")
    return OpenAIAdapter(transport=json_transport(handler, calls), request_logger=request_logger, **kwargs)


def test_summarize_sends_chat_request(request_logger):
    calls: List[httpx.Request] = []
    adapter = make_adapter(lambda r: (200, completion("  A short summary.  ")), calls, request_logger)

    assert adapter.summarize("Long text", {"timeout": 3}) == "A short summary."  # nosec B101

    request = calls[0]
    assert request.method == "POST"
    assert request.url == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.extensions["timeout"]["read"] == 3.0
    body = json.loads(request.content)
    assert body["model"] == "gpt-3.5-turbo"
    assert body["messages"][0]["role"] == "system"
    assert body["messages"][1] == {"role": "user", "content": "Long text"}
    assert body["max_tokens"] == 150
    assert "response_format" not in body

    details = request_logger.get_last_request_details()
    assert details["headers"]["Authorization"] == REDACTED
    assert request_logger.get_last_response_details()["status_code"] == 200


def test_structured_operations_request_json_mode():
    calls: List[httpx.Request] = []
    reply = json.dumps({"entities": [{"entity": "Ada Lovelace", "type": "Person", "confidence": 0.9}]})
    adapter = make_adapter(lambda r: (200, completion(reply)), calls)

    entities = adapter.extract_entities("Ada Lovelace wrote notes.", {"entity_types": ["person"]})
    assert [(e.text, e.type) for e in entities] == [("Ada Lovelace", "person")]
    body = json.loads(calls[0].content)
    assert body["response_format"] == {"type": "json_object"}
    assert "limited to: person" in body["messages"][0]["content"]


def test_fenced_and_truncated_json_is_repaired():
    reply = '```json\n{"categories": [{"category": "science", "confidence": 0.8},'
    adapter = make_adapter(lambda r: (200, completion(reply)))
    scores = adapter.classify("Physics paper", ["science", "sports"])
    assert [(s.category, s.score) for s in scores] == [("science", 0.8)]


def test_keywords_and_quality():
    replies = iter(
        [
            completion(json.dumps({"keywords": [{"keyword": "b", "score": 0.2}, {"keyword": "a", "score": 0.9}]})),
            completion(json.dumps({"score": 130, "breakdown": {"readability": 80}, "suggestions": ["Shorter sentences"]})),
        ]
    )
    adapter = make_adapter(lambda r: (200, next(replies)))
    keywords = adapter.generate_keywords("text", {"limit": 1})
    assert [k.keyword for k in keywords] == ["a"]
    quality = adapter.calculate_quality_score("text")
    assert quality.score == 100.0
    assert quality.breakdown == {"readability": 80.0}
    assert quality.suggestions == ["Shorter sentences"]


def test_unparseable_reply_is_a_response_format_error():
    adapter = make_adapter(lambda r: (200, completion("I cannot help with that")))
    with pytest.raises(ResponseFormatError):
        adapter.extract_entities("text")


def test_model_override_and_usage_cost():
    calls: List[httpx.Request] = []
    adapter = make_adapter(lambda r: (200, completion("ok", 1000, 1000)), calls)
    adapter.summarize("x", {"model": "gpt-4"})
    assert json.loads(calls[0].content)["model"] == "gpt-4"
    usage = adapter.get_usage_info()
    assert usage["requests"] == 1
    assert usage["total_tokens"] == 2000
    assert usage["cost"] == pytest.approx(0.09)
    assert usage["model"] == "gpt-3.5-turbo"


def test_error_payload_becomes_adapter_error():
    body = {"error": {"message": "You exceeded your current quota", "type": "insufficient_quota", "code": "insufficient_quota"}}
    adapter = make_adapter(lambda r: (429, body))
    with pytest.raises(AdapterError) as info:
        adapter.summarize("text")
    assert info.value.status_code == 429
    assert info.value.provider_code == "insufficient_quota"
    assert info.value.message == "You exceeded your current quota"


def test_missing_api_key_fails_without_network():
    calls: List[httpx.Request] = []
    adapter = make_adapter(lambda r: (200, completion("x")), calls, api_key=None)
    with pytest.raises(AdapterError) as info:
        adapter.summarize("text")
    assert info.value.provider_code == "invalid_api_key"
    assert info.value.level_hint is ErrorLevel.AUTH
    assert calls == []

    status = adapter.test_connection()
    assert status.success is False
    assert status.message == "API key is missing"


def test_connection_check_lists_models():
    def handler(request: httpx.Request):
        assert request.method == "GET"
        assert request.url.path == "/v1/models"
        return 200, {"data": [{"id": "gpt-4o", "owned_by": "openai"}, {"id": "gpt-4o-mini"}]}

    adapter = make_adapter(handler)
    status = adapter.test_connection({"timeout": 2})
    assert status.success is True
    assert status.provider_status == {"status_code": 200, "model_count": 2}

    models = adapter.get_models()
    assert [m.id for m in models] == ["gpt-4o", "gpt-4o-mini"]
    assert models[0].capabilities == {"owned_by": "openai"}


def test_connection_check_captures_failure():
    adapter = make_adapter(lambda r: (401, {"error": {"message": "Incorrect API key provided", "code": "invalid_api_key"}}))
    status = adapter.test_connection()
    assert status.success is False
    assert status.message == "Connection failed: Incorrect API key provided"
    assert status.provider_status == {"status_code": 401}


def test_malformed_completion_shape():
    adapter = make_adapter(lambda r: (200, {"choices": []}))
    with pytest.raises(ResponseFormatError):
        adapter.summarize("text")
