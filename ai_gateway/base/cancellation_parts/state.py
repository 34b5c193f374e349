"""Internal state holder for cancellation tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass
class State:
    """Mutable token state guarded by the owning token's lock."""

    cancelled: bool = False
    reason: Optional[str] = None
    callbacks: List[Callable[[], None]] = field(default_factory=list)


__all__ = ["State"]
