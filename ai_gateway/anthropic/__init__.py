"""Anthropic provider adapter."""

from .client import AnthropicAdapter

__all__ = ["AnthropicAdapter"]
