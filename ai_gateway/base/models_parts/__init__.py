"""One-class-per-file data transfer objects for adapter results."""

from .entity import Entity
from .category_score import CategoryScore
from .keyword_score import KeywordScore
from .quality_score import QualityScore
from .connection_status import ConnectionStatus
from .capabilities import Capabilities
from .model_info import ModelInfo

__all__ = [
    "Entity",
    "CategoryScore",
    "KeywordScore",
    "QualityScore",
    "ConnectionStatus",
    "Capabilities",
    "ModelInfo",
]
