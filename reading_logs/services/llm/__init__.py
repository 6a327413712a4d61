"""LLM Package

Structured extraction of reading logs from images:
- Provider implementations (Anthropic)
- Prompt building, static output schema and response parsing

Usage:
    from reading_logs.services.llm import AnthropicProvider, ResponseParser
"""

from reading_logs.services.llm.exceptions import (
    AuthenticationError,
    EmptyResponseError,
    LLMProviderError,
    ProviderUnavailableError,
    RateLimitError,
    ResponseParseError,
)
from reading_logs.services.llm.prompt_builder import PromptBuilder
from reading_logs.services.llm.providers import (
    AnthropicProvider,
    LLMResponse,
    ProviderHealth,
    VisionProvider,
)
from reading_logs.services.llm.response_parser import ResponseParser
from reading_logs.services.llm.schema import READING_LOG_SCHEMA

__all__ = [
    "AnthropicProvider",
    "LLMResponse",
    "ProviderHealth",
    "VisionProvider",
    "PromptBuilder",
    "ResponseParser",
    "READING_LOG_SCHEMA",
    "LLMProviderError",
    "RateLimitError",
    "AuthenticationError",
    "ProviderUnavailableError",
    "ResponseParseError",
    "EmptyResponseError",
]
