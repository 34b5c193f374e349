"""Typed parameter object for provider adapter initialization.

Purpose
-------
Provide a small, provider-agnostic DTO capturing the initialization
parameters shared by adapters (credentials, base URL, default model). The
factory merges it into constructor keyword arguments, explicit kwargs winning.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.

Notes
-----
- Pure data container: no I/O. Credentials arrive already resolved; this
  object never looks them up.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field


class AdapterParams(BaseModel):
    """Common provider adapter initialization parameters.

    Attributes
    ----------
    provider:
        Canonical provider name. Dropped before reaching adapter constructors.
    model:
        Default model identifier for operations that do not pass ``model``.
    api_key:
        API key or token, already resolved by the host.
    base_url:
        Optional API base URL override (proxies, self-hosted gateways).
    timeout_seconds:
        Default per-call timeout when operation options omit ``timeout``.
    headers:
        Static HTTP headers added to every request.
    extra:
        Provider-specific keyword arguments (e.g. ``models`` for HuggingFace).
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    headers: Mapping[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)


__all__ = ["AdapterParams"]
