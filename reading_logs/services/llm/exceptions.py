"""LLM Provider Exception Hierarchy

Structured exception types for extraction API errors:
- LLMProviderError: Base class for all provider errors
- RateLimitError: Rate limit exceeded
- AuthenticationError: Missing or invalid API credentials
- ProviderUnavailableError: Provider temporarily unavailable
- ResponseParseError: Response doesn't match the reading log schema
- EmptyResponseError: Response carried no text content

All of them are ExtractionErrors, so the batch records them against the
image and moves on.
"""

from typing import Optional

from reading_logs.utils.exceptions import ExtractionError


class LLMProviderError(ExtractionError):
    """Base exception for all LLM provider errors."""

    def __init__(self, message: str, provider: Optional[str] = None):
        self.provider = provider
        super().__init__(message)


class RateLimitError(LLMProviderError):
    """Raised when provider rate limit is exceeded.

    Attributes:
        retry_after: Seconds to wait before retrying (if provided by API)
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[float] = None,
        provider: Optional[str] = None,
    ):
        self.retry_after = retry_after
        super().__init__(
            f"{message}. Retry after: {retry_after}s" if retry_after else message,
            provider=provider,
        )


class AuthenticationError(LLMProviderError):
    """Raised when the API key is missing, invalid or revoked."""

    def __init__(
        self,
        message: str = "API authentication failed",
        provider: Optional[str] = None,
    ):
        super().__init__(message, provider=provider)


class ProviderUnavailableError(LLMProviderError):
    """Raised on timeouts, connection failures and 5xx responses."""

    def __init__(
        self,
        message: str = "Provider temporarily unavailable",
        provider: Optional[str] = None,
    ):
        super().__init__(message, provider=provider)


class ResponseParseError(ExtractionError):
    """Response text is not valid JSON or doesn't match the schema.

    Attributes:
        raw: The offending response text
    """

    def __init__(self, message: str, raw: Optional[str] = None):
        self.raw = raw
        super().__init__(f"{message}\nraw: {raw}" if raw else message)


class EmptyResponseError(ResponseParseError):
    """Response contained no text content."""

    def __init__(self, message: str = "no text content in API response"):
        super().__init__(message)
