"""Tests for the Anthropic provider."""

from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest

from reading_logs.services.llm.exceptions import (
    AuthenticationError,
    LLMProviderError,
    ProviderUnavailableError,
    RateLimitError,
)
from reading_logs.services.llm.providers.anthropic import (
    STRUCTURED_OUTPUTS_BETA,
    AnthropicProvider,
)
from reading_logs.services.llm.providers.base import LLMResponse, ProviderHealth
from reading_logs.services.llm.schema import READING_LOG_SCHEMA
from reading_logs.utils.exceptions import ExtractionError


def make_response(text="{}", stop_reason="end_turn"):
    response = MagicMock()
    response.content = [MagicMock(type="text", text=text)]
    response.usage.input_tokens = 1500
    response.usage.output_tokens = 120
    response.stop_reason = stop_reason
    return response


def status_error(cls, status_code, headers=None):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    response = httpx.Response(status_code, request=request, headers=headers or {})
    return cls("error", response=response, body=None)


@pytest.fixture
def client():
    client = MagicMock()
    client.beta.messages.create.return_value = make_response('{"ok": true}')
    return client


@pytest.fixture
def provider(client):
    return AnthropicProvider(model="test-model", client=client)


class TestLLMResponse:
    """Tests for LLMResponse dataclass."""

    def test_defaults(self) -> None:
        response = LLMResponse(
            content="{}",
            input_tokens=100,
            output_tokens=50,
            model="test",
            provider="test",
            latency_ms=10.0,
        )
        assert response.finish_reason is None


class TestProviderHealth:
    """Tests for ProviderHealth dataclass."""

    def test_record_success(self) -> None:
        health = ProviderHealth(provider="test")
        health.record_success(100, 20)
        assert health.total_requests == 1
        assert health.total_input_tokens == 100
        assert health.last_success is not None

    def test_degrades_after_consecutive_failures(self) -> None:
        health = ProviderHealth(provider="test")
        for _ in range(3):
            health.record_failure("boom")
        assert health.status == "degraded"
        for _ in range(2):
            health.record_failure("boom")
        assert health.status == "unavailable"
        health.record_success()
        assert health.status == "healthy"
        assert health.get_stats()["total_failures"] == 5


class TestAnthropicProvider:
    """Tests for AnthropicProvider."""

    def test_request_shape(self, provider, client) -> None:
        provider.extract_structured(
            media_type="image/png",
            data="aGVsbG8=",
            prompt="Extract it",
            schema=READING_LOG_SCHEMA,
            max_tokens=1024,
        )

        kwargs = client.beta.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 1024
        assert kwargs["betas"] == [STRUCTURED_OUTPUTS_BETA]
        assert kwargs["output_format"] == {
            "type": "json_schema",
            "schema": READING_LOG_SCHEMA,
        }
        image, text = kwargs["messages"][0]["content"]
        assert image["source"] == {
            "type": "base64",
            "media_type": "image/png",
            "data": "aGVsbG8=",
        }
        assert text == {"type": "text", "text": "Extract it"}

    def test_response_normalized(self, provider) -> None:
        response = provider.extract_structured("image/jpeg", "x", "p", {})
        assert response.content == '{"ok": true}'
        assert response.input_tokens == 1500
        assert response.output_tokens == 120
        assert response.provider == "anthropic"
        assert response.finish_reason == "end_turn"
        assert provider.get_health().total_requests == 1

    def test_no_text_block_gives_empty_content(self, provider, client) -> None:
        response = make_response()
        response.content = [MagicMock(type="thinking")]
        client.beta.messages.create.return_value = response

        assert provider.extract_structured("image/jpeg", "x", "p", {}).content == ""

    def test_missing_api_key(self, monkeypatch) -> None:
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        provider = AnthropicProvider()

        with pytest.raises(AuthenticationError, match="ANTHROPIC_API_KEY"):
            provider.extract_structured("image/jpeg", "x", "p", {})
        assert provider.get_health().total_failures == 1

    def test_client_built_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        with patch(
            "reading_logs.services.llm.providers.anthropic.anthropic.Anthropic"
        ) as mock_cls:
            mock_cls.return_value.beta.messages.create.return_value = make_response()
            AnthropicProvider(timeout_seconds=30).extract_structured(
                "image/jpeg", "x", "p", {}
            )

        assert mock_cls.call_args.kwargs["api_key"] == "sk-ant-test"
        assert mock_cls.call_args.kwargs["timeout"] == 30
        assert mock_cls.call_args.kwargs["max_retries"] == 0

    @pytest.mark.parametrize(
        "error,expected",
        [
            (status_error(anthropic.AuthenticationError, 401), AuthenticationError),
            (status_error(anthropic.PermissionDeniedError, 403), AuthenticationError),
            (status_error(anthropic.RateLimitError, 429), RateLimitError),
            (status_error(anthropic.InternalServerError, 500), ProviderUnavailableError),
            (status_error(anthropic.BadRequestError, 400), LLMProviderError),
        ],
    )
    def test_status_error_classification(
        self, provider, client, error, expected
    ) -> None:
        client.beta.messages.create.side_effect = error

        with pytest.raises(expected) as exc_info:
            provider.extract_structured("image/jpeg", "x", "p", {})

        assert isinstance(exc_info.value, ExtractionError)
        assert exc_info.value.provider == "anthropic"

    def test_connection_error(self, provider, client) -> None:
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client.beta.messages.create.side_effect = anthropic.APIConnectionError(
            request=request
        )
        with pytest.raises(ProviderUnavailableError):
            provider.extract_structured("image/jpeg", "x", "p", {})

    def test_rate_limit_retry_after(self, provider, client) -> None:
        client.beta.messages.create.side_effect = status_error(
            anthropic.RateLimitError, 429, headers={"retry-after": "30"}
        )
        with pytest.raises(RateLimitError) as exc_info:
            provider.extract_structured("image/jpeg", "x", "p", {})
        assert exc_info.value.retry_after == 30.0

    def test_unexpected_error_wrapped(self, provider, client) -> None:
        client.beta.messages.create.side_effect = ValueError("weird")
        with pytest.raises(LLMProviderError, match="API call failed: weird"):
            provider.extract_structured("image/jpeg", "x", "p", {})
