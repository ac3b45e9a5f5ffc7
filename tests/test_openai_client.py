"""Tests for OpenAICompletionClient."""

import json
import pytest
import httpx
from unittest.mock import Mock
import openai
from openai import OpenAI
from llm.base_client import CompletionUnavailable
from llm.directive import DIRECTIVE
from llm.openai_client import OpenAICompletionClient
from schemas.message import Message, MessageRole


def _transport_client(handler, captured=None) -> OpenAICompletionClient:
    """Build a client whose HTTP traffic goes to handler."""
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return handler(request)

    sdk = OpenAI(
        api_key="sk-test-secret",
        max_retries=0,
        http_client=httpx.Client(transport=httpx.MockTransport(recording_handler)),
    )
    return OpenAICompletionClient(client=sdk)


def _reply_body(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestOpenAICompletionRequest:
    """Test the outbound request shape."""

    def setup_method(self):
        """Set up test fixtures."""
        self.captured = []
        self.client = _transport_client(
            lambda request: httpx.Response(200, json=_reply_body("We open at 9.")),
            captured=self.captured,
        )

    def test_first_turn_request(self):
        """Test a first question sends the directive plus the user message."""
        transcript = [Message.create(MessageRole.USER, "What are your hours?")]

        self.client.complete(transcript)

        assert len(self.captured) == 1
        request = self.captured[0]
        assert request.method == "POST"
        assert request.url.path.endswith("/chat/completions")
        assert request.headers["authorization"] == "Bearer sk-test-secret"

        body = json.loads(request.content)
        assert body["messages"] == [
            {"role": "system", "content": DIRECTIVE},
            {"role": "user", "content": "What are your hours?"},
        ]
        assert body["model"] == "gpt-4o-mini"
        assert body["temperature"] == 0.6
        assert body["max_tokens"] == 180

    def test_full_history_in_order(self):
        """Test every transcript message is sent, in order, untruncated."""
        transcript = []
        for i in range(12):
            role = MessageRole.USER if i % 2 == 0 else MessageRole.ASSISTANT
            transcript.append(Message.create(role, f"message {i}"))

        self.client.complete(transcript)

        sent = json.loads(self.captured[0].content)["messages"]
        assert len(sent) == 13
        assert sent[0]["role"] == "system"
        assert [m["content"] for m in sent[1:]] == [f"message {i}" for i in range(12)]
        assert [m["role"] for m in sent[1:]] == [m.role.value for m in transcript]

    def test_parameters_fixed_across_calls(self):
        """Test model and sampling parameters do not vary per call."""
        transcript = [Message.create(MessageRole.USER, "Hi")]
        self.client.complete(transcript)
        self.client.complete(transcript)

        bodies = [json.loads(request.content) for request in self.captured]
        for key in ("model", "temperature", "max_tokens"):
            assert bodies[0][key] == bodies[1][key]


class TestOpenAICompletionResponse:
    """Test reply extraction and failure mapping."""

    def setup_method(self):
        """Set up test fixtures."""
        self.transcript = [Message.create(MessageRole.USER, "What are your hours?")]

    def test_reply_is_trimmed(self):
        """Test surrounding whitespace is removed from the reply."""
        client = _transport_client(
            lambda request: httpx.Response(
                200, json={"choices": [{"message": {"content": "  Hi there!  "}}]}
            )
        )
        assert client.complete(self.transcript) == "Hi there!"

    def test_only_first_choice_used(self):
        """Test later candidates are ignored."""
        client = _transport_client(
            lambda request: httpx.Response(200, json={"choices": [
                {"message": {"content": "first"}},
                {"message": {"content": "second"}},
            ]})
        )
        assert client.complete(self.transcript) == "first"

    def test_null_content_is_empty_reply(self):
        """Test a null content field is an empty success."""
        client = _transport_client(
            lambda request: httpx.Response(200, json=_reply_body(None))
        )
        assert client.complete(self.transcript) == ""

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 429, 500, 503])
    def test_error_status_unavailable(self, status):
        """Test any non-success status maps to unavailable."""
        client = _transport_client(
            lambda request: httpx.Response(status, json={"error": {"message": "nope"}})
        )
        with pytest.raises(CompletionUnavailable):
            client.complete(self.transcript)

    def test_single_attempt_on_failure(self):
        """Test a failed request is not retried."""
        captured = []
        client = _transport_client(
            lambda request: httpx.Response(500, json={"error": {"message": "boom"}}),
            captured=captured,
        )
        with pytest.raises(CompletionUnavailable):
            client.complete(self.transcript)

        assert len(captured) == 1

    def test_network_error_unavailable(self):
        """Test connection failures map to unavailable."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = _transport_client(handler)
        with pytest.raises(CompletionUnavailable):
            client.complete(self.transcript)

    def test_timeout_unavailable(self):
        """Test timeouts map to unavailable."""
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = _transport_client(handler)
        with pytest.raises(CompletionUnavailable):
            client.complete(self.transcript)

    def test_undecodable_body_unavailable(self):
        """Test a body that is not JSON maps to unavailable."""
        client = _transport_client(
            lambda request: httpx.Response(
                200,
                content=b"<html>gateway</html>",
                headers={"content-type": "application/json"},
            )
        )
        with pytest.raises(CompletionUnavailable):
            client.complete(self.transcript)

    def test_missing_choices_unavailable(self):
        """Test a body without candidates maps to unavailable."""
        client = _transport_client(
            lambda request: httpx.Response(200, json={"choices": []})
        )
        with pytest.raises(CompletionUnavailable):
            client.complete(self.transcript)


class TestOpenAICompletionClientSetup:
    """Test construction without network access."""

    def test_missing_key_unavailable(self, monkeypatch):
        """Test a client without credentials fails every call as unavailable."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        client = OpenAICompletionClient()

        assert client.client is None
        with pytest.raises(CompletionUnavailable):
            client.complete([Message.create(MessageRole.USER, "Hi")])

    def test_key_not_kept_on_wrapper(self):
        """Test the credential is not stored on the wrapper."""
        client = OpenAICompletionClient(api_key="sk-very-secret")

        assert "sk-very-secret" not in repr(vars(client))
        assert client.client.max_retries == 0

    def test_model_override(self):
        """Test model override and provider metadata."""
        client = OpenAICompletionClient(client=Mock(), model="gpt-4o")

        assert client.get_model_name() == "gpt-4o"
        assert client.get_provider_name() == "openai"

    def test_sdk_exception_with_mock(self):
        """Test SDK errors raised by an injected client map to unavailable."""
        sdk = Mock()
        sdk.chat.completions.create.side_effect = openai.APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )
        client = OpenAICompletionClient(client=sdk)

        with pytest.raises(CompletionUnavailable):
            client.complete([Message.create(MessageRole.USER, "Hi")])
