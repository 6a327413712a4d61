"""Vision Provider Implementations

- VisionProvider: Abstract base class defining the provider contract
- LLMResponse: Standardized response from any provider
- AnthropicProvider: Claude models
"""

from reading_logs.services.llm.providers.base import (
    LLMResponse,
    ProviderHealth,
    VisionProvider,
)
from reading_logs.services.llm.providers.anthropic import AnthropicProvider

__all__ = [
    "VisionProvider",
    "LLMResponse",
    "ProviderHealth",
    "AnthropicProvider",
]
