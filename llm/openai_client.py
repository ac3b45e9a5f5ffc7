"""OpenAI chat-completions client."""

import os
import logging
from typing import Optional, Sequence

import openai
from openai import OpenAI

from schemas.message import Message
from .base_client import BaseCompletionClient, CompletionUnavailable

logger = logging.getLogger(__name__)


class OpenAICompletionClient(BaseCompletionClient):
    """OpenAI GPT client implementation."""

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: float = BaseCompletionClient.DEFAULT_TEMPERATURE,
        max_tokens: int = BaseCompletionClient.DEFAULT_MAX_TOKENS,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[OpenAI] = None
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (falls back to OPENAI_API_KEY env var)
            model: Model to use (default: gpt-4o-mini)
            temperature: Sampling temperature used for every request
            max_tokens: Reply length cap used for every request
            base_url: Optional endpoint override
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
            api_key = api_key or os.environ.get("OPENAI_API_KEY")
            if api_key:
                kwargs = {"api_key": api_key, "max_retries": 0}
                if base_url:
                    kwargs["base_url"] = base_url
                if timeout is not None:
                    kwargs["timeout"] = timeout
                self.client = OpenAI(**kwargs)
                logger.info(f"OpenAI client initialized with model: {self.model}")
            else:
                logger.warning("No OpenAI API key provided")

    def complete(self, transcript: Sequence[Message]) -> str:
        """Send one chat completion request to OpenAI."""
        if not self.client:
            logger.warning("OpenAI client not initialized, no reply available")
            raise CompletionUnavailable("OpenAI client not initialized")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(transcript),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.APIStatusError as e:
            logger.warning(f"OpenAI API returned status {e.status_code}")
            raise CompletionUnavailable(f"status {e.status_code}") from e
        except openai.OpenAIError as e:
            logger.warning(f"OpenAI API error: {type(e).__name__}")
            raise CompletionUnavailable(type(e).__name__) from e
        except ValueError as e:
            # Undecodable JSON body
            logger.warning(f"OpenAI response could not be decoded: {e}")
            raise CompletionUnavailable("malformed response") from e

        return self._extract_reply(response)

    def _extract_reply(self, response) -> str:
        """Pull the first candidate's text out of a completion response."""
        choices = getattr(response, "choices", None)
        if not isinstance(choices, list) or not choices:
            logger.warning("OpenAI response has no choices")
            raise CompletionUnavailable("malformed response")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None) if message is not None else None
        if content is None:
            return ""
        if not isinstance(content, str):
            logger.warning("OpenAI response content is not text")
            raise CompletionUnavailable("malformed response")
        return content.strip()

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "openai"
