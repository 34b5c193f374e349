"""Provider factory utilities.

Purpose
-------
Create adapter instances from a canonical provider id. Adapter modules are
imported lazily with ``importlib`` so constructing one provider never imports
the others.

External dependencies
---------------------
- Standard library only (``importlib``). ``AdapterParams`` is a pydantic model.

Timeout and fallback semantics
------------------------------
- No timeouts are introduced here. The factory performs no retries or
  fallbacks; it either returns an instance or raises ``UnknownProviderError``.

Scope
-----
Supported providers: ``openai``, ``anthropic``, ``huggingface`` and ``mock``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto.adapter_params import AdapterParams
from .errors import UnknownProviderError
from .interfaces import ProviderAdapter


def create_adapter(provider: str, **kwargs: Any) -> ProviderAdapter:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create provider adapters from a canonical name (e.g. ``"openai"``).

    Raises :class:`UnknownProviderError` with an actionable message for
    unknown ids, import failures, missing classes and constructor errors.
    """

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "ai_gateway.openai.client", "class": "OpenAIAdapter"},
        "anthropic": {"module": "ai_gateway.anthropic.client", "class": "AnthropicAdapter"},
        "huggingface": {"module": "ai_gateway.huggingface.client", "class": "HuggingFaceAdapter"},
        "mock": {"module": "ai_gateway.mock.client", "class": "MockAdapter"},
    }

    @classmethod
    def create(
        cls,
        provider: str,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> ProviderAdapter:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider name (e.g., ``"openai"``).
        params:
            Optional :class:`AdapterParams`; merged into ``kwargs`` with
            explicit kwargs taking precedence.
        **kwargs:
            Adapter constructor kwargs (``api_key``, ``model``, ``transport``, ...).

        Raises
        ------
        UnknownProviderError
            If the provider is unknown, its module fails to import, the
            adapter class is missing, or the constructor raises.
        """
        merged_kwargs = cls._coerce_params(params, kwargs)

        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except Exception as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc

        try:
            klass: Type[ProviderAdapter] = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

        try:
            return klass(**merged_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{provider}' adapter constructor: {exc}"
            ) from exc
        except Exception as exc:  # pragma: no cover - adapter runtime init error
            raise UnknownProviderError(f"Failed to initialize provider '{provider}': {exc}") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @staticmethod
    def _coerce_params(params: Optional[AdapterParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``AdapterParams`` into constructor ``kwargs``.

        Contract
        --------
        - Values explicitly provided in ``kwargs`` take precedence over ``params``.
        - ``None`` fields of ``params`` are ignored so adapter defaults apply.
        - ``headers`` are shallow-merged, kwargs winning conflicts.
        - ``params.extra`` is flattened into top-level constructor kwargs.
        """
        if params is None:
            return dict(kwargs)
        merged: Dict[str, Any] = dict(params.model_dump(exclude_none=True))
        merged.pop("provider", None)
        extra = merged.pop("extra", None) or {}
        for key, value in extra.items():
            merged.setdefault(key, value)
        if not merged.get("headers"):
            merged.pop("headers", None)
        if "headers" in merged and "headers" in kwargs:
            h = dict(merged["headers"])
            h |= kwargs["headers"]
            merged["headers"] = h
            kwargs = {k: v for k, v in kwargs.items() if k != "headers"}
        merged.update(kwargs)
        return merged


__all__ = ["ProviderFactory", "create_adapter"]
