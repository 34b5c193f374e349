"""Adapter result models (public surface).

Re-exports the dataclasses under ``models_parts`` so callers import from a
single stable path.
"""

from .models_parts import (
    Capabilities,
    CategoryScore,
    ConnectionStatus,
    Entity,
    KeywordScore,
    ModelInfo,
    QualityScore,
)

__all__ = [
    "Entity",
    "CategoryScore",
    "KeywordScore",
    "QualityScore",
    "ConnectionStatus",
    "Capabilities",
    "ModelInfo",
]
