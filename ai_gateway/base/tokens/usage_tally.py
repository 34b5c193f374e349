"""Cumulative token usage of one adapter instance."""

from __future__ import annotations

from threading import Lock
from typing import Any, Dict, Mapping, Optional, Tuple

from .extraction import CanonicalUsage

# USD per 1K tokens as (input, output)
CostTable = Mapping[str, Tuple[float, float]]


class UsageTally:
    """Thread-safe running totals reported by ``get_usage_info``.

    Args:
        costs: Per-model ``(input, output)`` prices per 1K tokens. Models
            missing from the table are counted at zero cost. Lookup also
            matches the longest table key that prefixes the model id, so
            ``gpt-4o-2024-08-06`` is priced as ``gpt-4o``.
    """

    def __init__(self, costs: Optional[CostTable] = None) -> None:
        self._costs = dict(costs or {})
        self._lock = Lock()
        self._prompt = 0
        self._completion = 0
        self._total = 0
        self._requests = 0
        self._cost = 0.0

    def _price(self, model: Optional[str]) -> Tuple[float, float]:
        if not model:
            return (0.0, 0.0)
        if model in self._costs:
            return self._costs[model]
        matches = [key for key in self._costs if model.startswith(key)]
        return self._costs[max(matches, key=len)] if matches else (0.0, 0.0)

    def add(self, usage: CanonicalUsage, model: Optional[str] = None) -> None:
        prompt = usage.get("prompt") or 0
        completion = usage.get("completion") or 0
        total = usage.get("total") or prompt + completion
        input_price, output_price = self._price(model)
        with self._lock:
            self._requests += 1
            self._prompt += prompt
            self._completion += completion
            self._total += total
            self._cost += (prompt * input_price + completion * output_price) / 1000

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "requests": self._requests,
                "prompt_tokens": self._prompt,
                "completion_tokens": self._completion,
                "total_tokens": self._total,
                "cost": round(self._cost, 6),
            }


__all__ = ["UsageTally", "CostTable"]
