"""Extraction service: one image in, one ReadingLog out.

Ties together the vision provider, the prompt, the static output schema and
the response parser. Each call is a single blocking request with no retry;
a failed image is retried on the next batch run instead.
"""

from typing import Any, Dict, Optional

import structlog

from reading_logs.models.config import LLMSettings
from reading_logs.models.reading_log import ReadingLog
from reading_logs.services.llm.exceptions import ResponseParseError
from reading_logs.services.llm.prompt_builder import PromptBuilder
from reading_logs.services.llm.providers.anthropic import AnthropicProvider
from reading_logs.services.llm.providers.base import VisionProvider
from reading_logs.services.llm.response_parser import ResponseParser
from reading_logs.services.llm.schema import READING_LOG_SCHEMA

logger = structlog.get_logger()


class ExtractionService:
    """Extracts structured reading log data from encoded images"""

    def __init__(
        self,
        provider: VisionProvider,
        max_tokens: int = 1024,
        prompt_builder: Optional[PromptBuilder] = None,
        parser: Optional[ResponseParser] = None,
    ):
        self.provider = provider
        self.max_tokens = max_tokens
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.parser = parser or ResponseParser()

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "ExtractionService":
        """Build the service for the configured provider"""
        provider = AnthropicProvider(
            api_key=settings.api_key,
            model=settings.model,
            timeout_seconds=settings.timeout_seconds,
        )
        return cls(provider, max_tokens=settings.max_tokens)

    def extract(self, media_type: str, data: str) -> ReadingLog:
        """
        Extract a reading log from one image.

        Args:
            media_type: Image media type (image/jpeg, image/png, ...)
            data: Base64-encoded image bytes

        Returns:
            Parsed reading log

        Raises:
            ExtractionError: Transport, auth, empty or invalid response
        """
        response = self.provider.extract_structured(
            media_type=media_type,
            data=data,
            prompt=self.prompt_builder.build(),
            schema=READING_LOG_SCHEMA,
            max_tokens=self.max_tokens,
        )

        try:
            return self.parser.parse(response.content)
        except ResponseParseError:
            if response.finish_reason == "max_tokens":
                logger.warning(
                    "response_truncated",
                    max_tokens=self.max_tokens,
                    output_tokens=response.output_tokens,
                )
            raise

    def usage_stats(self) -> Dict[str, Any]:
        """Request, failure and token counts reported by the provider"""
        return self.provider.get_health().get_stats()
