"""Completion client factory."""

from enum import Enum
from typing import Optional

from .base_client import BaseCompletionClient
from .openai_client import OpenAICompletionClient
from .anthropic_client import AnthropicCompletionClient


class LLMProvider(str, Enum):
    """Supported completion providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


def create_completion_client(
    provider: LLMProvider,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    temperature: float = BaseCompletionClient.DEFAULT_TEMPERATURE,
    max_tokens: int = BaseCompletionClient.DEFAULT_MAX_TOKENS,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None
) -> BaseCompletionClient:
    """
    Create a completion client for the specified provider.

    Args:
        provider: Completion provider (openai or anthropic)
        api_key: API key for the provider
        model: Optional model override
        temperature: Fixed sampling temperature
        max_tokens: Fixed reply length cap
        base_url: Optional endpoint override (OpenAI only)
        timeout: Optional request timeout in seconds

    Returns:
        Configured completion client

    Raises:
        ValueError: If provider is not supported
    """
    if provider == LLMProvider.OPENAI:
        return OpenAICompletionClient(
            api_key=api_key,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            base_url=base_url,
            timeout=timeout
        )
    elif provider == LLMProvider.ANTHROPIC:
        return AnthropicCompletionClient(
            api_key=api_key,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout
        )
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")
