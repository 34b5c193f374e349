"""Registration error for objects that do not satisfy the adapter contract."""
from __future__ import annotations


class InvalidProviderError(TypeError):
    """Raised by ``ServiceManager.register_provider`` for non-conforming adapters.

    Attributes:
        name: Provider id the registration was attempted under.
        missing: Operation names the object does not expose.
    """

    def __init__(self, name: str, missing: tuple[str, ...] = ()) -> None:
        detail = f"missing required method(s): {', '.join(missing)}" if missing else "not a ProviderAdapter"
        super().__init__(f"Invalid provider '{name}': {detail}")
        self.name = name
        self.missing = missing


__all__ = ["InvalidProviderError"]
