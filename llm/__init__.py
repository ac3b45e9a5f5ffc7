"""Completion client abstraction layer."""

from .base_client import BaseCompletionClient, CompletionUnavailable
from .directive import DIRECTIVE
from .factory import create_completion_client, LLMProvider

__all__ = [
    "BaseCompletionClient",
    "CompletionUnavailable",
    "DIRECTIVE",
    "create_completion_client",
    "LLMProvider",
]
