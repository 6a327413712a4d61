"""Anthropic (Claude) Provider Implementation

Uses the Messages API structured-outputs beta so the model's reply is
constrained to the reading log JSON schema.
"""

import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import anthropic
import structlog

from reading_logs.services.llm.exceptions import (
    AuthenticationError,
    LLMProviderError,
    ProviderUnavailableError,
    RateLimitError,
)
from reading_logs.services.llm.providers.base import (
    LLMResponse,
    ProviderHealth,
    VisionProvider,
)

logger = structlog.get_logger()

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
STRUCTURED_OUTPUTS_BETA = "structured-outputs-2025-11-13"
API_KEY_ENV = "ANTHROPIC_API_KEY"


class AnthropicProvider(VisionProvider):
    """Anthropic Claude provider implementation.

    The SDK client is created on first use, so a missing API key fails the
    first image rather than startup.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout_seconds: float = 120.0,
        client: Optional[Any] = None,
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key (default: ANTHROPIC_API_KEY env var)
            model: Model identifier
            timeout_seconds: Per-request timeout
            client: Pre-built SDK client, mainly for tests
        """
        self._api_key = api_key
        self._model = model
        self._timeout = timeout_seconds
        self._client = client
        self._health = ProviderHealth(provider="anthropic")

    @property
    def name(self) -> str:
        """Provider name."""
        return "anthropic"

    @property
    def model(self) -> str:
        """Current model identifier."""
        return self._model

    def _get_client(self) -> Any:
        if self._client is None:
            api_key = self._api_key or os.environ.get(API_KEY_ENV)
            if not api_key:
                raise AuthenticationError(
                    f"{API_KEY_ENV} is not set", provider=self.name
                )
            self._client = anthropic.Anthropic(
                api_key=api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    def extract_structured(
        self,
        media_type: str,
        data: str,
        prompt: str,
        schema: Dict[str, Any],
        max_tokens: int = 1024,
    ) -> LLMResponse:
        """Send an image to Claude and return the structured JSON reply.

        Raises:
            RateLimitError: When rate limit is exceeded
            AuthenticationError: When API key is missing or invalid
            ProviderUnavailableError: On timeouts, connection or server errors
            LLMProviderError: Any other API failure
        """
        start_time = time.time()

        try:
            client = self._get_client()
            response = client.beta.messages.create(
                model=self._model,
                max_tokens=max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": media_type,
                                    "data": data,
                                },
                            },
                            {"type": "text", "text": prompt},
                        ],
                    }
                ],
                output_format={"type": "json_schema", "schema": schema},
                betas=[STRUCTURED_OUTPUTS_BETA],
            )
        except LLMProviderError as e:
            self._health.record_failure(str(e))
            raise
        except Exception as e:
            self._health.record_failure(str(e))
            raise self._classify_error(e) from e

        latency_ms = (time.time() - start_time) * 1000

        llm_response = LLMResponse(
            content=self._extract_text(response),
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=self._model,
            provider=self.name,
            latency_ms=latency_ms,
            finish_reason=response.stop_reason,
            timestamp=datetime.now(timezone.utc),
        )

        self._health.record_success(
            llm_response.input_tokens, llm_response.output_tokens
        )

        logger.debug(
            "anthropic_extract_success",
            model=self._model,
            input_tokens=llm_response.input_tokens,
            output_tokens=llm_response.output_tokens,
            finish_reason=llm_response.finish_reason,
            latency_ms=round(latency_ms, 1),
        )

        return llm_response

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Text of the first text block, or "" if there is none."""
        for block in response.content or []:
            if getattr(block, "type", None) == "text":
                return str(block.text)
        return ""

    def _classify_error(self, error: Exception) -> LLMProviderError:
        """Classify an SDK exception into the provider error hierarchy."""
        message = f"API call failed: {error}"

        if isinstance(
            error, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)
        ):
            return AuthenticationError(message, provider=self.name)

        if isinstance(error, anthropic.RateLimitError):
            return RateLimitError(
                message,
                retry_after=self._extract_retry_after(error),
                provider=self.name,
            )

        if isinstance(error, anthropic.APIConnectionError):
            return ProviderUnavailableError(message, provider=self.name)

        if isinstance(error, anthropic.APIStatusError) and error.status_code >= 500:
            return ProviderUnavailableError(message, provider=self.name)

        return LLMProviderError(message, provider=self.name)

    def _extract_retry_after(self, error: Exception) -> Optional[float]:
        """Extract retry-after value from error if available."""
        response = getattr(error, "response", None)
        if response is not None and hasattr(response, "headers"):
            retry_after = response.headers.get("retry-after")
            if retry_after:
                try:
                    return float(retry_after)
                except ValueError:
                    return None
        return None

    def get_health(self) -> ProviderHealth:
        """Get current provider health status."""
        return self._health
