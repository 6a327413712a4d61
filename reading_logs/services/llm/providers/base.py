"""Abstract Vision Provider Interface

This module defines:
- LLMResponse: Standardized response dataclass
- ProviderHealth: Request success/failure tracking
- VisionProvider: Abstract base class for image extraction providers
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional


@dataclass
class LLMResponse:
    """Standardized response from a provider.

    Attributes:
        content: The generated text content ("" if none was returned)
        input_tokens: Number of input tokens consumed
        output_tokens: Number of output tokens generated
        model: The model identifier used
        provider: The provider name
        latency_ms: Request latency in milliseconds
        finish_reason: Why generation stopped (end_turn, max_tokens, etc.)
        timestamp: When the response was received
    """

    content: str
    input_tokens: int
    output_tokens: int
    model: str
    provider: str
    latency_ms: float
    finish_reason: Optional[str] = None
    timestamp: Optional[datetime] = None


@dataclass
class ProviderHealth:
    """Request outcome tracking for a single provider."""

    provider: str
    status: Literal["healthy", "degraded", "unavailable"] = "healthy"
    consecutive_failures: int = 0
    total_requests: int = 0
    total_failures: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    last_success: Optional[datetime] = None
    last_failure: Optional[datetime] = None
    failure_reason: Optional[str] = None

    def record_success(self, input_tokens: int = 0, output_tokens: int = 0) -> None:
        """Record a successful request."""
        self.total_requests += 1
        self.consecutive_failures = 0
        self.total_input_tokens += input_tokens
        self.total_output_tokens += output_tokens
        self.last_success = datetime.now(timezone.utc)
        self.status = "healthy"

    def record_failure(self, reason: str) -> None:
        """Record a failed request."""
        self.total_requests += 1
        self.total_failures += 1
        self.consecutive_failures += 1
        self.last_failure = datetime.now(timezone.utc)
        self.failure_reason = reason
        if self.consecutive_failures >= 3:
            self.status = "degraded"
        if self.consecutive_failures >= 5:
            self.status = "unavailable"

    def get_stats(self) -> Dict[str, Any]:
        """Get health statistics as dictionary."""
        return {
            "provider": self.provider,
            "status": self.status,
            "consecutive_failures": self.consecutive_failures,
            "total_requests": self.total_requests,
            "total_failures": self.total_failures,
            "total_input_tokens": self.total_input_tokens,
            "total_output_tokens": self.total_output_tokens,
            "failure_reason": self.failure_reason,
        }


class VisionProvider(ABC):
    """Abstract base class for image extraction providers.

    Implementations:
        - AnthropicProvider: Claude models
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'anthropic')."""
        pass  # pragma: no cover - abstract method, always overridden

    @property
    @abstractmethod
    def model(self) -> str:
        """Current model identifier."""
        pass  # pragma: no cover - abstract method, always overridden

    @abstractmethod
    def extract_structured(
        self,
        media_type: str,
        data: str,
        prompt: str,
        schema: Dict[str, Any],
        max_tokens: int = 1024,
    ) -> LLMResponse:
        """Send one image with instructions and get schema-constrained JSON.

        Args:
            media_type: Image media type (e.g. image/png)
            data: Base64-encoded image bytes
            prompt: Extraction instructions
            schema: JSON schema the response must follow
            max_tokens: Maximum tokens to generate

        Returns:
            LLMResponse whose content is the JSON text

        Raises:
            LLMProviderError: Base class for all provider errors
        """
        pass  # pragma: no cover - abstract method, always overridden

    def get_health(self) -> ProviderHealth:
        """Get current provider health status."""
        return ProviderHealth(provider=self.name)
