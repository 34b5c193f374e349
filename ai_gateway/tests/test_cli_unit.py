"""``ai-gateway`` CLI handlers driven through ``main``."""
from __future__ import annotations

import json

import pytest

from ai_gateway.service.cli import main
from ai_gateway.service.cli.cli_actions import load_cli_settings, to_jsonable
from ai_gateway.service.cli.cli_parser import build_parser

TEXT = "Acme Corp opened a new office in Berlin."


def _stderr_error(captured) -> dict:
    lines = [line for line in captured.err.strip().splitlines() if line.startswith('{"error"')]
    return json.loads(lines[-1])["error"]


@pytest.fixture()
def keyless_openai(tmp_path):
    path = tmp_path / "gateway.yaml"
    path.write_text("providers:\n  openai:\n    model: gpt-4o-mini\n", encoding="utf-8")
    return str(path)


@pytest.fixture()
def env_config(tmp_path):
    path = tmp_path / "env.yaml"
    path.write_text("providers:\n  openai:\n    api_key: ${OPENAI_API_KEY}\n", encoding="utf-8")
    return str(path)


def test_classify_offline(capsys):
    code = main(["classify", "--provider", "openai", "--status", "429", "--message", "Rate limit exceeded"])
    assert code == 0  # nosec B101
    out = json.loads(capsys.readouterr().out)
    assert out["code"] == "rate_limit_exceeded"
    assert out["level"] == 2
    assert out["level_name"] == "Authentication/Authorization"
    assert out["retry_recommended"] is True


def test_classify_structured_code(capsys):
    main(["classify", "--provider", "anthropic", "--status", "529", "--code", "overloaded_error"])
    assert json.loads(capsys.readouterr().out)["code"] == "model_overloaded"


def test_status_with_default_mock(capsys):
    assert main(["status"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["mock"]["success"] is True
    assert out["mock"]["attempts"] == 1


def test_status_reports_failure(capsys, keyless_openai):
    assert main(["status", "--config", keyless_openai, "--retries", "0"]) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["openai"]["success"] is False
    assert out["openai"]["message"] == "API key is missing"


def test_status_with_bad_config(capsys, tmp_path):
    assert main(["status", "--config", str(tmp_path / "absent.yaml")]) == 2
    assert "Could not read settings file" in _stderr_error(capsys.readouterr())


def test_capabilities(capsys):
    assert main(["capabilities"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out[0]["name"] == "mock"
    assert out[0]["default"] is True
    assert out[0]["checks"]["summarize"] == {
        "supported": True,
        "label": "Content Summarization",
        "tested": False,
        "success": False,
        "message": "",
    }


def test_capabilities_unknown_provider(capsys):
    assert main(["capabilities", "--provider", "ghost"]) == 2
    assert "ghost" in _stderr_error(capsys.readouterr())


def test_invoke_summarize(capsys):
    assert main(["invoke", "summarize", "--text", TEXT]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"provider": "mock", "operation": "summarize", "result": "Acme Corp expanded to Berlin."}


def test_invoke_with_options_and_categories(capsys):
    assert main(["invoke", "keywords", "--text", TEXT, "--option", "limit=1"]) == 0
    result = json.loads(capsys.readouterr().out)["result"]
    assert result == [{"keyword": "acme", "score": 0.95}]

    assert main(["invoke", "classify", "--text", TEXT, "--categories", "technology", "business"]) == 0
    result = json.loads(capsys.readouterr().out)["result"]
    assert [r["category"] for r in result] == ["business", "technology"]


def test_invoke_unknown_operation(capsys):
    assert main(["invoke", "translate", "--text", "x"]) == 2
    assert "Unknown operation" in _stderr_error(capsys.readouterr())


def test_invoke_classified_failure(capsys, keyless_openai):
    assert main(["invoke", "summarize", "--config", keyless_openai, "--text", "x"]) == 1
    error = _stderr_error(capsys.readouterr())
    assert error["code"] == "invalid_api_key"
    assert error["level_name"] == "Authentication/Authorization"
    assert error["retry_recommended"] is False


def test_option_pairs_are_validated():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["invoke", "summarize", "--option", "novalue"])


def test_env_flag_expands_references(monkeypatch, env_config):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    parser = build_parser()
    with_env = load_cli_settings(parser.parse_args(["status", "--config", env_config, "--env", "--debug"]))
    assert with_env.providers["openai"].api_key == "sk-from-env"
    assert with_env.debug is True
    without_env = load_cli_settings(parser.parse_args(["status", "--config", env_config]))
    assert without_env.providers["openai"].api_key == "${OPENAI_API_KEY}"


def test_to_jsonable_handles_nested_models():
    from ai_gateway.base.models import KeywordScore

    assert to_jsonable({"k": [KeywordScore(keyword="a", score=0.5)], "n": (1, 2)}) == {
        "k": [{"keyword": "a", "score": 0.5}],
        "n": [1, 2],
    }
