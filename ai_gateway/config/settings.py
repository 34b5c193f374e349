"""Gateway settings loaded by the host.

Purpose
-------
Describe the providers a host wants registered, their credentials and the
service manager policy (default provider, task preferences, timeouts) as
validated pydantic models, loadable from a JSON or YAML file.

The gateway core never reads the environment. ``${VAR}`` references inside a
settings file are expanded only from the ``environ`` mapping passed to
:func:`load_settings`; with no mapping they are left untouched. A reference
to a variable absent from the mapping expands to an empty string.

File format
-----------
```
default_provider: openai
timeout_seconds: 10
task_preferences:
  summarize: anthropic
providers:
  openai:
    api_key: ${OPENAI_API_KEY}
    model: gpt-4o-mini
  claude:
    type: anthropic
    api_key: ${ANTHROPIC_API_KEY}
```

A provider section's ``type`` names the adapter (``openai``, ``anthropic``,
``huggingface``, ``mock``) and defaults to the section name.
"""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..base.dto.test_options import TestOptions
from .defaults import DEFAULT_LOG_CAPACITY, DEFAULT_TIMEOUT_SECONDS

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class SettingsError(ValueError):
    """Raised when a settings source cannot be read, parsed or validated."""


class ProviderSettings(BaseModel):
    """One provider registration.

    Attributes
    ----------
    type:
        Adapter id understood by ``ProviderFactory``; defaults to the section name.
    enabled:
        Disabled sections are skipped by ``build_service_manager``.
    api_key, model, base_url, timeout_seconds, headers:
        Adapter constructor parameters.
    extra:
        Provider-specific constructor kwargs (e.g. ``models`` for HuggingFace).
    """

    model_config = ConfigDict(extra="forbid")

    type: Optional[str] = None
    enabled: bool = True
    api_key: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    headers: Dict[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("api_key", "model", "base_url")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class GatewaySettings(BaseModel):
    """Top-level gateway settings."""

    model_config = ConfigDict(extra="forbid")

    providers: Dict[str, ProviderSettings] = Field(default_factory=dict)
    default_provider: Optional[str] = None
    task_preferences: Dict[str, str] = Field(default_factory=dict)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    debug: bool = False
    log_capacity: int = Field(default=DEFAULT_LOG_CAPACITY, ge=1)
    connection_test: TestOptions = Field(default_factory=TestOptions)

    def provider_type(self, name: str) -> str:
        """Return the adapter id for provider section ``name``."""
        section = self.providers[name]
        return (section.type or name).lower()


def expand_env_refs(value: Any, environ: Optional[Mapping[str, str]]) -> Any:
    """Recursively replace ``${VAR}`` in strings with values from ``environ``."""
    if environ is None:
        return value
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: str(environ.get(m.group(1), "")), value)
    if isinstance(value, Mapping):
        return {k: expand_env_refs(v, environ) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_refs(v, environ) for v in value]
    return value


def _parse_text(text: str, source: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SettingsError(f"Could not parse settings from {source}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings in {source} must be a mapping, got {type(data).__name__}")
    return data


def load_settings(
    path: Union[str, Path, None] = None,
    data: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GatewaySettings:
    """Load and validate gateway settings.

    Parameters
    ----------
    path:
        JSON or YAML file; JSON is tried first.
    data:
        Already-parsed settings mapping; used when ``path`` is not given.
    environ:
        Mapping used to expand ``${VAR}`` references.

    Raises
    ------
    SettingsError
        Unreadable file, unparseable content or failed validation.
    """
    if path is not None:
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Could not read settings file '{p}': {exc}") from exc
        raw: Mapping[str, Any] = _parse_text(text, str(p))
    else:
        raw = dict(data or {})
    try:
        return GatewaySettings.model_validate(expand_env_refs(raw, environ))
    except ValidationError as exc:
        raise SettingsError(f"Invalid gateway settings: {exc}") from exc


__all__ = [
    "SettingsError",
    "ProviderSettings",
    "GatewaySettings",
    "expand_env_refs",
    "load_settings",
]
