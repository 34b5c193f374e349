"""ProviderAdapter contract (single-class module).

Declares every operation a provider may support. Content operations default
to raising :class:`UnsupportedOperationError`, the "not supported" sentinel,
so an adapter overrides exactly what its provider can do and the base
``get_capabilities`` infers the supported set from those overrides.

Adapters report every network call through their bound ``RequestLogger``
and raise raw :class:`AdapterError` failures; classification is left to the
service manager.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence

from ..capabilities.operations import (
    OP_CLASSIFY,
    OP_EXTRACT_ENTITIES,
    OP_GENERATE_KEYWORDS,
    OP_QUALITY_SCORE,
    OP_SUMMARIZE,
    OP_TEST_CONNECTION,
)
from ..errors import UnsupportedOperationError
from ..models import (
    Capabilities,
    CategoryScore,
    ConnectionStatus,
    Entity,
    KeywordScore,
    ModelInfo,
    QualityScore,
)

if TYPE_CHECKING:
    from ..diagnostics.request_logger import RequestLogger

Options = Optional[Mapping[str, Any]]


class ProviderAdapter(ABC):
    """Uniform operation set implemented once per concrete provider.

    Operations take ``(text, options)`` except ``classify`` (which also takes
    ``categories``) and the meta operations. ``options["timeout"]`` bounds
    the network call in seconds.
    """

    def __init__(self, *, request_logger: "RequestLogger | None" = None) -> None:
        if request_logger is None:
            # local import: diagnostics depends on this module
            from ..diagnostics.request_logger import RequestLogger

            request_logger = RequestLogger(self.provider_name)
        self._request_logger = request_logger

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"``."""

    @property
    def request_logger(self) -> "RequestLogger":
        return self._request_logger

    def bind_request_logger(self, request_logger: "RequestLogger") -> None:
        """Route this adapter's request/response trace to ``request_logger``."""
        self._request_logger = request_logger

    # ------------------------------------------------------------------
    # Content operations

    def summarize(self, text: str, options: Options = None) -> str:
        raise UnsupportedOperationError(self.provider_name, OP_SUMMARIZE)

    def extract_entities(self, text: str, options: Options = None) -> List[Entity]:
        raise UnsupportedOperationError(self.provider_name, OP_EXTRACT_ENTITIES)

    def classify(
        self,
        text: str,
        categories: Optional[Sequence[str]] = None,
        options: Options = None,
    ) -> List[CategoryScore]:
        raise UnsupportedOperationError(self.provider_name, OP_CLASSIFY)

    def generate_keywords(self, text: str, options: Options = None) -> List[KeywordScore]:
        raise UnsupportedOperationError(self.provider_name, OP_GENERATE_KEYWORDS)

    def calculate_quality_score(self, text: str, options: Options = None) -> QualityScore:
        raise UnsupportedOperationError(self.provider_name, OP_QUALITY_SCORE)

    # ------------------------------------------------------------------
    # Meta operations

    def test_connection(self, options: Options = None) -> ConnectionStatus:
        """Probe the provider.

        Overrides must never raise; failures are captured into the returned
        :class:`ConnectionStatus`.
        """
        raise UnsupportedOperationError(self.provider_name, OP_TEST_CONNECTION)

    def get_capabilities(self) -> Capabilities:
        """Return the operations this adapter overrides."""
        from ..capabilities.core import detect_capabilities

        return Capabilities(supported_operations=detect_capabilities(self))

    def get_models(self) -> List[ModelInfo]:
        return []

    def get_usage_info(self) -> Dict[str, Any]:
        """Best-effort usage summary; empty when the provider has no usage notion."""
        return {}

    def close(self) -> None:
        """Release transport resources held by the adapter."""

    def __enter__(self) -> "ProviderAdapter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["ProviderAdapter", "Options"]
