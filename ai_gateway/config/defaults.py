"""ai_gateway.config.defaults
==========================

Central place for small, stable default values used by the adapters, the
service manager and the CLI. Plain constants only (no I/O, no imports from
other gateway packages).
"""

from __future__ import annotations

# ---- Timeouts / diagnostics ----
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CONNECTION_TEST_RETRIES = 2
DEFAULT_BACKOFF_BASE_SECONDS = 0.5
DEFAULT_LOG_CAPACITY = 50

# ---- OpenAI ----
OPENAI_DEFAULT_MODEL = "gpt-3.5-turbo"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"

# ---- Anthropic ----
ANTHROPIC_DEFAULT_MODEL = "claude-3-haiku-20240307"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_API_VERSION = "2023-06-01"

# ---- HuggingFace Inference API ----
HUGGINGFACE_DEFAULT_BASE_URL = "https://api-inference.huggingface.co/models"
HUGGINGFACE_DEFAULT_MODELS = {
    "summarize": "facebook/bart-large-cnn",
    "extract_entities": "dbmdz/bert-large-cased-finetuned-conll03-english",
    "classify": "facebook/bart-large-mnli",
    "generate_keywords": "yanekyuk/bert-uncased-keyword-extractor",
}
HUGGINGFACE_TEST_MODEL = "distilbert-base-uncased"

# ---- Mock ----
MOCK_DEFAULT_MODEL = "mock-1"

# ---- CLI ----
CLI_DEFAULT_PROVIDER = "mock"

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_CONNECTION_TEST_RETRIES",
    "DEFAULT_BACKOFF_BASE_SECONDS",
    "DEFAULT_LOG_CAPACITY",
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "HUGGINGFACE_DEFAULT_BASE_URL",
    "HUGGINGFACE_DEFAULT_MODELS",
    "HUGGINGFACE_TEST_MODEL",
    "MOCK_DEFAULT_MODEL",
    "CLI_DEFAULT_PROVIDER",
]
