"""Tests for AnthropicCompletionClient."""

import pytest
import httpx
import anthropic
from unittest.mock import Mock
from llm.anthropic_client import AnthropicCompletionClient
from llm.base_client import CompletionUnavailable
from llm.directive import DIRECTIVE
from schemas.message import Message, MessageRole


def _text_block(text):
    block = Mock()
    block.type = "text"
    block.text = text
    return block


class TestAnthropicCompletionClient:
    """Test request mapping and failure handling against a mocked SDK."""

    def setup_method(self):
        """Set up test fixtures."""
        self.sdk = Mock()
        self.client = AnthropicCompletionClient(client=self.sdk)
        self.transcript = [
            Message.create(MessageRole.USER, "Do you do product photography?"),
        ]

    def test_directive_sent_as_system(self):
        """Test the directive travels in the system field, not the message list."""
        self.sdk.messages.create.return_value = Mock(content=[_text_block("Yes!")])

        self.client.complete(self.transcript)

        kwargs = self.sdk.messages.create.call_args.kwargs
        assert kwargs["system"] == DIRECTIVE
        assert kwargs["messages"] == [
            {"role": "user", "content": "Do you do product photography?"}
        ]
        assert kwargs["temperature"] == 0.6
        assert kwargs["max_tokens"] == 180
        assert kwargs["model"] == AnthropicCompletionClient.DEFAULT_MODEL

    def test_text_blocks_joined_and_trimmed(self):
        """Test text blocks are concatenated and trimmed."""
        other = Mock()
        other.type = "thinking"
        self.sdk.messages.create.return_value = Mock(
            content=[_text_block("  Yes, we "), other, _text_block("do!  ")]
        )

        assert self.client.complete(self.transcript) == "Yes, we do!"

    def test_no_text_is_empty_reply(self):
        """Test a reply without text blocks is an empty success."""
        self.sdk.messages.create.return_value = Mock(content=[])

        assert self.client.complete(self.transcript) == ""

    def test_status_error_unavailable(self):
        """Test API status errors map to unavailable."""
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        self.sdk.messages.create.side_effect = anthropic.InternalServerError(
            "overloaded",
            response=httpx.Response(500, request=request),
            body=None,
        )

        with pytest.raises(CompletionUnavailable):
            self.client.complete(self.transcript)

    def test_connection_error_unavailable(self):
        """Test connection errors map to unavailable."""
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        self.sdk.messages.create.side_effect = anthropic.APIConnectionError(request=request)

        with pytest.raises(CompletionUnavailable):
            self.client.complete(self.transcript)

    def test_missing_key_unavailable(self, monkeypatch):
        """Test a client without credentials fails as unavailable."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        client = AnthropicCompletionClient()

        with pytest.raises(CompletionUnavailable):
            client.complete(self.transcript)

    def test_provider_metadata(self):
        """Test provider and model names."""
        assert self.client.get_provider_name() == "anthropic"
        assert self.client.get_model_name() == AnthropicCompletionClient.DEFAULT_MODEL
