"""Response Parser Module

Turns the structured-output text of an extraction response into a
ReadingLog:
- Rejecting empty responses
- Parsing JSON (tolerating a stray markdown code fence)
- Validating against the ReadingLog model
"""

import json
import re

import structlog
from pydantic import ValidationError

from reading_logs.models.reading_log import ReadingLog
from reading_logs.services.llm.exceptions import (
    EmptyResponseError,
    ResponseParseError,
)

logger = structlog.get_logger()

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class ResponseParser:
    """Parses extraction responses into ReadingLog records."""

    def parse(self, text: str) -> ReadingLog:
        """Parse response text into a reading log.

        Args:
            text: Text content of the response

        Returns:
            Validated ReadingLog

        Raises:
            EmptyResponseError: If there is no text to parse
            ResponseParseError: If the text is not a valid reading log
        """
        if not text or not text.strip():
            raise EmptyResponseError()

        content = self._clean_json_content(text)

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ResponseParseError(
                f"failed to parse response JSON: {e}", raw=text
            ) from e

        if not isinstance(data, dict):
            raise ResponseParseError(
                f"expected a JSON object, got {type(data).__name__}", raw=text
            )

        try:
            record = ReadingLog(**data)
        except ValidationError as e:
            raise ResponseParseError(
                f"response doesn't match reading log schema: {e}", raw=text
            ) from e

        duplicates = record.duplicate_dates()
        if duplicates:
            # The report keeps the first entry for each date
            logger.warning(
                "duplicate_entry_dates",
                full_name=record.full_name,
                dates=duplicates,
            )

        return record

    def _clean_json_content(self, content: str) -> str:
        content = content.strip()
        match = _CODE_FENCE.match(content)
        return match.group(1) if match else content
