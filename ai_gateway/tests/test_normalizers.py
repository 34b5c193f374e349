"""Reply parsing: JSON repair, normalizers and rule-based keywords."""
from __future__ import annotations

import pytest

from ai_gateway.base.errors import ResponseFormatError
from ai_gateway.base.utils import (
    attempt_json_repair,
    clamp,
    clean_json_markers,
    extract_keywords,
    int_option,
    min_confidence_option,
    normalize_categories,
    normalize_entities,
    normalize_keywords,
    normalize_quality,
    parse_json_reply,
    parse_limit,
)


def test_clean_json_markers():
    assert clean_json_markers('```json\n{"a": 1}\n```') == '{"a": 1}'  # nosec B101
    assert clean_json_markers("```\n[1]\n```") == "[1]"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('Sure! {"a": [1, 2,],}', {"a": [1, 2]}),
        ('{"a": {"b": "unterminated', {"a": {"b": "unterminated"}}),
        ('```json\n[{"k": 1}, {"k": 2}\n```', [{"k": 1}, {"k": 2}]),
    ],
)
def test_parse_json_reply_repairs(raw, expected):
    assert parse_json_reply(raw) == expected


def test_parse_json_reply_gives_up():
    with pytest.raises(ResponseFormatError):
        parse_json_reply("")
    with pytest.raises(ResponseFormatError):
        parse_json_reply("no json here")


def test_repair_never_raises_on_garbage():
    assert isinstance(attempt_json_repair("}}]]"), str)


def test_clamp_and_limit():
    assert clamp("0.5") == 0.5
    assert clamp(7) == 1.0
    assert clamp("nan", default=0.3) == 0.3
    assert clamp(None, default=0.2) == 0.2
    assert parse_limit({"limit": "3"}) == 3
    assert parse_limit({"limit": -1}) == 10
    assert parse_limit(None, default=4) == 4


def test_option_helpers_tolerate_malformed_values():
    assert int_option({"max_tokens": "256"}, "max_tokens", 100) == 256
    assert int_option({"max_tokens": "lots"}, "max_tokens", 100) == 100
    assert int_option({"max_tokens": True}, "max_tokens", 100) == 100
    assert int_option({"max_tokens": 0}, "max_tokens", 100) == 100
    assert min_confidence_option({"min_confidence": "0.4"}) == 0.4
    assert min_confidence_option({"min_confidence": 3}) == 1.0
    assert min_confidence_option({"min_confidence": "high"}) is None
    assert min_confidence_option(None) is None


def test_entities_accept_variants_and_defaults():
    payload = {
        "entities": [
            {"entity": "Ada", "type": "PERSON", "confidence": 0.9},
            {"name": "London", "category": "location"},
            {"type": "date"},
            "noise",
        ]
    }
    entities = normalize_entities(payload)
    assert [(e.text, e.type, e.confidence) for e in entities] == [("Ada", "person", 0.9), ("London", "location", 0.8)]
    assert normalize_entities(payload, min_confidence=0.85)[0].text == "Ada"
    with pytest.raises(ResponseFormatError):
        normalize_entities({"something": "else"})


def test_categories_shapes_and_filtering():
    wrapped = {"categories": [{"category": "a", "confidence": 0.2}, {"label": "B", "score": 0.7}]}
    assert [(c.category, c.score) for c in normalize_categories(wrapped)] == [("B", 0.7), ("a", 0.2)]
    assert [c.category for c in normalize_categories(wrapped, ["b"])] == ["B"]
    single = normalize_categories({"category": "news", "confidence": 0.6})
    assert [(c.category, c.score) for c in single] == [("news", 0.6)]
    with pytest.raises(ResponseFormatError):
        normalize_categories("text")


def test_keywords_dedupe_rank_and_limit():
    payload = {"keywords": ["alpha", {"keyword": "beta", "score": 0.9}, {"keyword": "alpha", "score": 0.4}, "gamma"]}
    keywords = normalize_keywords(payload, limit=2)
    assert [(k.keyword, k.score) for k in keywords] == [("alpha", 1.0), ("beta", 0.9)]


def test_quality_clamps_and_collects():
    quality = normalize_quality({"overall": "85", "components": {"readability": 120}, "improvements": "Trim intro"})
    assert quality.score == 85.0
    assert quality.breakdown == {"readability": 100.0}
    assert quality.suggestions == ["Trim intro"]
    with pytest.raises(ResponseFormatError):
        normalize_quality({"breakdown": {}})
    with pytest.raises(ResponseFormatError):
        normalize_quality([1, 2])


def test_rule_based_keywords():
    keywords = extract_keywords("The cat and the dog. The cat sat on a mat!", limit=3)
    assert [k.keyword for k in keywords] == ["cat", "dog", "sat"]
    assert keywords[0].score == pytest.approx(2 / 5)
    assert extract_keywords("a an of") == []
