"""Capability detection utilities.

Two sources describe what an adapter can do:

- the structural surface: which content operations the adapter class
  actually implements (for ``ProviderAdapter`` subclasses, which base
  methods it overrides; for duck-typed objects, which callables it exposes);
- the adapter's own ``get_capabilities()`` self-report.

``merge_capabilities`` combines them so a self-report can add support but
never remove an operation found structurally. ``coerce_capabilities`` turns
whatever a duck-typed adapter reports into a :class:`Capabilities`.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Mapping, Optional

from ..interfaces import ProviderAdapter
from ..models import Capabilities
from .operations import CONTENT_OPERATIONS, normalize_operation


def implements_operation(adapter: Any, operation: str) -> bool:
    """Return True if ``adapter`` structurally implements ``operation``.

    For ``ProviderAdapter`` instances the method must be overridden, since
    the base implementation is the "not supported" sentinel.
    """
    method = getattr(adapter, operation, None)
    if not callable(method):
        return False
    if isinstance(adapter, ProviderAdapter):
        base_impl = getattr(ProviderAdapter, operation, None)
        impl = getattr(type(adapter), operation, None)
        return impl is not None and impl is not base_impl
    return True


def detect_capabilities(adapter: Any, operations: Iterable[str] = CONTENT_OPERATIONS) -> FrozenSet[str]:
    """Detect the content operations an adapter structurally implements.

    Args:
        adapter: The adapter instance to inspect.
        operations: Candidate operation names (defaults to all content operations).

    Returns:
        FrozenSet[str]: Operation names the adapter implements.
    """
    return frozenset(op for op in operations if implements_operation(adapter, op))


def merge_capabilities(
    structural: Iterable[str],
    reported: Optional[Iterable[str]],
) -> FrozenSet[str]:
    """Union of structural and self-reported operations.

    Non-destructive merge policy: everything detected structurally is kept;
    the self-report may only add operations.
    """
    return frozenset(structural) | frozenset(reported or ())


def reported_operations(report: Any) -> FrozenSet[str]:
    """Canonical operation names listed in a ``get_capabilities()`` report.

    Accepts a :class:`Capabilities` or a mapping with ``supported_operations``
    (or ``supportedOperations``). Aliases are normalized; unknown names and
    any other report shape are ignored.
    """
    if isinstance(report, Capabilities):
        return frozenset(report.supported_operations)
    if not isinstance(report, Mapping):
        return frozenset()
    ops = report.get("supported_operations", report.get("supportedOperations")) or ()
    if isinstance(ops, (str, bytes)) or not isinstance(ops, Iterable):
        return frozenset()
    out = set()
    for op in ops:
        try:
            out.add(normalize_operation(str(op)))
        except ValueError:
            continue
    return frozenset(out)


def coerce_capabilities(report: Any, adapter: Any) -> Capabilities:
    """Turn any self-report into :class:`Capabilities`.

    Mappings keep their ``features``; a report that lists no operations at
    all (``None``, a mapping without the key, another type) falls back to
    structural detection on ``adapter``.
    """
    if isinstance(report, Capabilities):
        return report
    if isinstance(report, Mapping) and (
        "supported_operations" in report or "supportedOperations" in report
    ):
        features = report.get("features")
        return Capabilities(
            supported_operations=reported_operations(report),
            features=dict(features) if isinstance(features, Mapping) else {},
        )
    return Capabilities(supported_operations=detect_capabilities(adapter))


__all__ = [
    "implements_operation",
    "detect_capabilities",
    "merge_capabilities",
    "reported_operations",
    "coerce_capabilities",
]
