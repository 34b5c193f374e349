"""AnthropicAdapter over a mocked Messages endpoint."""
from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from ai_gateway.anthropic import AnthropicAdapter
from ai_gateway.base.diagnostics import REDACTED, ErrorClassifier
from ai_gateway.base.errors import AdapterError, ErrorLevel, ResponseFormatError, describe_failure

from .utils import json_transport


def message(*texts: str, input_tokens: int = 12, output_tokens: int = 8) -> dict:
    return {
        "id": "msg_1",
        "type": "message",
        "content": [{"type": "text", "text": t} for t in texts],
        "usage": {"input_tokens": input_tokens, "output_tokens": output_tokens},
    }


def make_adapter(handler, calls=None, request_logger=None, **kwargs) -> AnthropicAdapter:
    kwargs.setdefault("api_key", "sk-ant-test")
    return AnthropicAdapter(transport=json_transport(handler, calls), request_logger=request_logger, **kwargs)


def test_summarize_uses_system_field_and_headers(request_logger):
    calls: List[httpx.Request] = []
    adapter = make_adapter(lambda r: (200, message("Part one. ", "Part two.")), calls, request_logger)

    assert adapter.summarize("Long article") == "Part one. Part two."  # nosec B101
    request = calls[0]
    assert request.url == "https://api.anthropic.com/v1/messages"
    assert request.headers["x-api-key"] == "sk-ant-test"
    assert request.headers["anthropic-version"] == "2023-06-01"
    body = json.loads(request.content)
    assert body["model"] == "claude-3-haiku-20240307"
    assert body["system"].startswith("You are a professional summarizer")
    assert body["messages"] == [{"role": "user", "content": "Long article"}]

    assert request_logger.get_last_request_details()["headers"]["x-api-key"] == REDACTED


def test_structured_prompts_demand_bare_json():
    calls: List[httpx.Request] = []
    reply = 'Here you go:\n{"keywords": [{"keyword": "llm", "score": 0.7}]}'
    adapter = make_adapter(lambda r: (200, message(reply)), calls)
    keywords = adapter.generate_keywords("About LLMs")
    assert [(k.keyword, k.score) for k in keywords] == [("llm", 0.7)]
    body = json.loads(calls[0].content)
    assert body["system"].endswith("Do not include any explanation or text outside the JSON.")
    assert "response_format" not in body


def test_classify_single_category_reply():
    adapter = make_adapter(lambda r: (200, message('{"category": "finance", "confidence": 0.66}')))
    scores = adapter.classify("Quarterly earnings rose")
    assert [(s.category, s.score) for s in scores] == [("finance", 0.66)]


def test_usage_is_priced_by_model_prefix():
    adapter = make_adapter(lambda r: (200, message("ok", input_tokens=1000, output_tokens=1000)))
    adapter.summarize("x")
    usage = adapter.get_usage_info()
    assert usage["prompt_tokens"] == 1000
    assert usage["completion_tokens"] == 1000
    assert usage["total_tokens"] == 2000
    assert usage["cost"] == pytest.approx(0.0015)


def test_no_text_blocks_is_a_format_error():
    adapter = make_adapter(lambda r: (200, {"content": [{"type": "tool_use", "id": "t"}]}))
    with pytest.raises(ResponseFormatError):
        adapter.summarize("x")


def test_overloaded_error_classifies_to_provider_tier():
    body = {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}
    adapter = make_adapter(lambda r: (529, body))
    with pytest.raises(AdapterError) as info:
        adapter.summarize("x")
    raw = describe_failure(info.value)
    assert raw.status_code == 529
    assert raw.provider_code == "overloaded_error"
    classified = ErrorClassifier().classify(
        adapter.provider_name, raw.status_code, raw.message, provider_code=raw.provider_code
    )
    assert classified.level is ErrorLevel.PROVIDER
    assert classified.code == "model_overloaded"


def test_connection_and_models():
    listing = {"data": [{"id": "claude-3-5-haiku-20241022", "display_name": "Claude 3.5 Haiku", "created_at": "2024-10-22T00:00:00Z"}]}
    adapter = make_adapter(lambda r: (200, listing))
    status = adapter.test_connection()
    assert status.success is True
    assert status.provider_status["model_count"] == 1
    models = adapter.get_models()
    assert models[0].name == "Claude 3.5 Haiku"
    assert models[0].updated_at == "2024-10-22T00:00:00Z"


def test_missing_key_fails_connection_test_and_operation():
    adapter = make_adapter(lambda r: (200, message("x")), api_key=None)
    assert adapter.test_connection().message == "API key is missing"
    with pytest.raises(AdapterError) as info:
        adapter.calculate_quality_score("x")
    assert info.value.provider_code == "invalid_api_key"
