"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from text_refiner.clients.llm_client import (
    LLMClient,
    LLMResponse,
    MalformedResponseError,
    classify_error,
)
from text_refiner.models.result import ErrorKind

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _make_api_message(text: str, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = [MagicMock(text=text)]
    return message


def _status_error(cls, status: int, message: str = "boom"):
    return cls(message, response=httpx.Response(status, request=_REQUEST), body=None)


@pytest.fixture
def api():
    """Patch AsyncAnthropic and expose the mocked messages.create."""
    with patch("text_refiner.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
        mock_client = MagicMock()
        mock_client.messages.create = AsyncMock(return_value=_make_api_message("hello world"))
        mock_cls.return_value = mock_client
        yield mock_client.messages.create


class TestLLMClientInit:
    def test_init_default_creates_client_with_no_kwargs(self):
        with patch("text_refiner.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient()
            mock_cls.assert_called_once_with()

    def test_init_with_api_key_passes_key(self):
        with patch("text_refiner.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient(api_key="test-key")
            mock_cls.assert_called_once_with(api_key="test-key")

    def test_init_with_both_params_passes_both(self):
        with patch("text_refiner.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient(api_key="test-key", timeout=30.0)
            mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0)


class TestLLMClientGenerate:
    async def test_generate_returns_llm_response(self, api):
        llm = LLMClient()
        result = await llm.generate("say hello")

        assert isinstance(result, LLMResponse)
        assert result.text == "hello world"
        assert result.input_tokens == 100
        assert result.output_tokens == 50

    async def test_generate_sends_sampling_parameters(self, api):
        llm = LLMClient()
        await llm.generate(
            "prompt",
            system="be brief",
            model="claude-test",
            temperature=0.8,
            top_p=0.9,
            max_tokens=256,
        )

        kwargs = api.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["temperature"] == 0.8
        assert kwargs["top_p"] == 0.9
        assert kwargs["max_tokens"] == 256
        assert kwargs["system"] == "be brief"
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    async def test_generate_omits_unset_optionals(self, api):
        llm = LLMClient()
        await llm.generate("prompt")

        kwargs = api.call_args.kwargs
        assert "top_p" not in kwargs
        assert "system" not in kwargs

    async def test_single_attempt_by_default(self, api):
        api.side_effect = anthropic.APIConnectionError(request=_REQUEST)
        llm = LLMClient()

        with pytest.raises(anthropic.APIConnectionError):
            await llm.generate("prompt")
        assert api.await_count == 1

    async def test_retries_transient_error_when_configured(self, api):
        api.side_effect = [
            anthropic.APIConnectionError(request=_REQUEST),
            _make_api_message("second time lucky"),
        ]
        llm = LLMClient(max_attempts=2)

        result = await llm.generate("prompt")

        assert result.text == "second time lucky"
        assert api.await_count == 2

    async def test_does_not_retry_auth_error(self, api):
        api.side_effect = _status_error(anthropic.AuthenticationError, 401)
        llm = LLMClient(max_attempts=3)

        with pytest.raises(anthropic.AuthenticationError):
            await llm.generate("prompt")
        assert api.await_count == 1

    async def test_empty_content_is_malformed(self, api):
        message = _make_api_message("")
        message.content = []
        api.return_value = message
        llm = LLMClient()

        with pytest.raises(MalformedResponseError):
            await llm.generate("prompt")

    async def test_non_text_block_is_malformed(self, api):
        message = _make_api_message("")
        message.content = [MagicMock(text=None)]
        api.return_value = message
        llm = LLMClient()

        with pytest.raises(MalformedResponseError):
            await llm.generate("prompt")

    async def test_usage_reported_per_response(self, api):
        api.side_effect = [
            _make_api_message("first", input_tokens=20, output_tokens=8),
            _make_api_message("second", input_tokens=30, output_tokens=12),
        ]
        llm = LLMClient()

        first = await llm.generate("prompt")
        second = await llm.generate("prompt")

        assert (first.input_tokens, first.output_tokens) == (20, 8)
        assert (second.input_tokens, second.output_tokens) == (30, 12)
        assert not hasattr(llm, "get_token_summary")

class TestClassifyError:
    def test_connection_error_is_network(self):
        assert classify_error(anthropic.APIConnectionError(request=_REQUEST)) is ErrorKind.NETWORK

    def test_timeout_is_network(self):
        assert classify_error(anthropic.APITimeoutError(request=_REQUEST)) is ErrorKind.NETWORK

    def test_authentication_error_is_auth(self):
        err = _status_error(anthropic.AuthenticationError, 401)
        assert classify_error(err) is ErrorKind.AUTH

    def test_permission_error_is_auth(self):
        err = _status_error(anthropic.PermissionDeniedError, 403)
        assert classify_error(err) is ErrorKind.AUTH

    def test_rate_limit_is_quota(self):
        err = _status_error(anthropic.RateLimitError, 429, "quota exceeded")
        assert classify_error(err) is ErrorKind.QUOTA

    def test_malformed_response(self):
        assert classify_error(MalformedResponseError("empty")) is ErrorKind.MALFORMED_RESPONSE

    def test_anything_else_is_unknown(self):
        assert classify_error(RuntimeError("quota exceeded")) is ErrorKind.UNKNOWN
