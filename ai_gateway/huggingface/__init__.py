"""HuggingFace Inference API adapter."""

from .client import HuggingFaceAdapter

__all__ = ["HuggingFaceAdapter"]
