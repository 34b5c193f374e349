"""Capability detection, merging and operation name normalization."""
from __future__ import annotations

import pytest

from ai_gateway.base.capabilities import normalize_operation
from ai_gateway.base.capabilities.core import (
    detect_capabilities,
    implements_operation,
    merge_capabilities,
    coerce_capabilities,
    reported_operations,
)
from ai_gateway.base.interfaces import ProviderAdapter
from ai_gateway.base.models import Capabilities


class KeywordsOnly(ProviderAdapter):
    @property
    def provider_name(self) -> str:
        return "kw"

    def generate_keywords(self, text, options=None):
        return []


def test_base_sentinels_do_not_count_as_implemented():
    adapter = KeywordsOnly()
    assert implements_operation(adapter, "generate_keywords") is True  # nosec B101
    assert implements_operation(adapter, "summarize") is False
    assert detect_capabilities(adapter) == frozenset({"generate_keywords"})
    assert adapter.get_capabilities() == Capabilities(supported_operations=frozenset({"generate_keywords"}))


def test_duck_typed_objects_use_callables():
    class Duck:
        summarize = staticmethod(lambda text, options=None: text)
        classify = "not callable"

    assert detect_capabilities(Duck()) == frozenset({"summarize"})


def test_merge_only_adds():
    assert merge_capabilities({"summarize"}, None) == frozenset({"summarize"})
    assert merge_capabilities({"summarize"}, ["classify"]) == frozenset({"summarize", "classify"})


def test_reported_operations_accepts_mappings():
    assert reported_operations({"supportedOperations": {"Score_Quality", "translate"}}) == frozenset(
        {"calculate_quality_score"}
    )
    assert reported_operations({"supported_operations": "summarize"}) == frozenset()
    assert reported_operations(["summarize"]) == frozenset()


def test_coerce_capabilities_from_mapping_or_structure():
    caps = coerce_capabilities({"supported_operations": ["keywords"], "features": {"json": True}}, KeywordsOnly())
    assert caps == Capabilities(frozenset({"generate_keywords"}), {"json": True})
    assert coerce_capabilities(None, KeywordsOnly()).supported_operations == frozenset({"generate_keywords"})
    same = Capabilities.of(["summarize"])
    assert coerce_capabilities(same, KeywordsOnly()) is same


@pytest.mark.parametrize(
    "name, canonical",
    [
        ("summarize", "summarize"),
        (" Score_Quality ", "calculate_quality_score"),
        ("quality-score", "calculate_quality_score"),
        ("keywords", "generate_keywords"),
        ("entities", "extract_entities"),
        ("test_connection", "test_connection"),
    ],
)
def test_normalize_operation(name, canonical):
    assert normalize_operation(name) == canonical


def test_normalize_operation_rejects_unknown():
    with pytest.raises(ValueError):
        normalize_operation("translate")


def test_capabilities_report():
    caps = Capabilities.of(["classify", "summarize"], default_model="m")
    assert caps.supports("classify")
    assert caps.to_dict() == {"supported_operations": ["classify", "summarize"], "features": {"default_model": "m"}}
