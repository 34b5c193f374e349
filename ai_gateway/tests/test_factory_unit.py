"""ProviderFactory resolution and parameter merging."""
from __future__ import annotations

import pytest

from ai_gateway.anthropic import AnthropicAdapter
from ai_gateway.base import ProviderFactory, create_adapter
from ai_gateway.base.dto import AdapterParams
from ai_gateway.base.errors import UnknownProviderError
from ai_gateway.huggingface import HuggingFaceAdapter
from ai_gateway.mock import MockAdapter
from ai_gateway.openai import OpenAIAdapter


def test_supported_providers_are_stable():
    assert ProviderFactory.supported() == ("openai", "anthropic", "huggingface", "mock")  # nosec B101


@pytest.mark.parametrize(
    "name, cls",
    [
        ("openai", OpenAIAdapter),
        ("Anthropic", AnthropicAdapter),
        (" huggingface ", HuggingFaceAdapter),
        ("mock", MockAdapter),
    ],
)
def test_create_by_name(name, cls):
    adapter = ProviderFactory.create(name, api_key="k")
    assert isinstance(adapter, cls)


def test_unknown_provider():
    with pytest.raises(UnknownProviderError, match="Unknown provider 'cohere'"):
        create_adapter("cohere")


def test_bad_constructor_arguments_are_reported():
    with pytest.raises(UnknownProviderError, match="Invalid arguments"):
        ProviderFactory.create("openai", nonsense=True)


def test_params_merge_with_kwargs_winning():
    params = AdapterParams(
        provider="openai",
        model="gpt-4o",
        api_key="from-params",
        base_url="https://proxy.local/v1",
        timeout_seconds=4,
        headers={"X-Team": "content", "X-Trace": "p"},
    )
    merged = ProviderFactory._coerce_params(params, {"api_key": "from-kwargs", "headers": {"X-Trace": "k"}})
    assert merged["api_key"] == "from-kwargs"
    assert merged["model"] == "gpt-4o"
    assert merged["timeout_seconds"] == 4
    assert merged["headers"] == {"X-Team": "content", "X-Trace": "k"}
    assert "provider" not in merged


def test_extra_is_flattened_into_constructor_kwargs():
    params = AdapterParams(provider="huggingface", api_key="hf", extra={"models": {"summarize": "t5-small"}})
    adapter = ProviderFactory.create("huggingface", params=params)
    assert adapter.task_models["summarize"] == "t5-small"


def test_none_fields_keep_adapter_defaults():
    adapter = ProviderFactory.create("openai", params=AdapterParams(provider="openai", api_key="k"))
    assert adapter.model == "gpt-3.5-turbo"
    assert adapter.base_url == "https://api.openai.com/v1"
