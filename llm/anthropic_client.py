"""Anthropic Claude completion client."""

import os
import logging
from typing import Optional, Sequence

import anthropic

from schemas.message import Message
from .base_client import BaseCompletionClient, CompletionUnavailable

logger = logging.getLogger(__name__)


class AnthropicCompletionClient(BaseCompletionClient):
    """Anthropic Claude client implementation."""

    DEFAULT_MODEL = "claude-3-5-haiku-latest"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = BaseCompletionClient.DEFAULT_TEMPERATURE,
        max_tokens: int = BaseCompletionClient.DEFAULT_MAX_TOKENS,
        timeout: Optional[float] = None,
        client: Optional[anthropic.Anthropic] = None
    ):
        """
        Initialize Anthropic client.

        Args:
            api_key: Anthropic API key (falls back to ANTHROPIC_API_KEY env var)
            model: Model to use (default: claude-3-5-haiku-latest)
            temperature: Sampling temperature used for every request
            max_tokens: Reply length cap used for every request
            timeout: Optional request timeout in seconds
            client: Pre-built SDK client (skips construction)
        """
        super().__init__(
            model=model or self.DEFAULT_MODEL,
            temperature=temperature,
            max_tokens=max_tokens
        )
        self.client = client

        if self.client is None:
            api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
            if api_key:
                kwargs = {"api_key": api_key, "max_retries": 0}
                if timeout is not None:
                    kwargs["timeout"] = timeout
                self.client = anthropic.Anthropic(**kwargs)
                logger.info(f"Anthropic client initialized with model: {self.model}")
            else:
                logger.warning("No Anthropic API key provided")

    def complete(self, transcript: Sequence[Message]) -> str:
        """Send one message request to Anthropic."""
        if not self.client:
            logger.warning("Anthropic client not initialized, no reply available")
            raise CompletionUnavailable("Anthropic client not initialized")

        # Anthropic takes the system prompt outside the message list
        messages = self.build_messages(transcript)
        system_content = messages[0]["content"]
        conversation_messages = messages[1:]

        try:
            response = self.client.messages.create(
                model=self.model,
                system=system_content,
                messages=conversation_messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except anthropic.APIStatusError as e:
            logger.warning(f"Anthropic API returned status {e.status_code}")
            raise CompletionUnavailable(f"status {e.status_code}") from e
        except anthropic.AnthropicError as e:
            logger.warning(f"Anthropic API error: {type(e).__name__}")
            raise CompletionUnavailable(type(e).__name__) from e
        except ValueError as e:
            logger.warning(f"Anthropic response could not be decoded: {e}")
            raise CompletionUnavailable("malformed response") from e

        blocks = getattr(response, "content", None)
        if not isinstance(blocks, list):
            logger.warning("Anthropic response has no content blocks")
            raise CompletionUnavailable("malformed response")

        content = ""
        for block in blocks:
            if getattr(block, "type", None) == "text":
                content += block.text or ""
        return content.strip()

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "anthropic"
