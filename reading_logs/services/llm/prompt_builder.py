"""Prompt Builder Module

Builds the extraction instructions sent alongside each reading log image.
"""

from typing import Sequence, Tuple

from reading_logs.models.reading_log import REPORT_DAYS

PROMPT_TEMPLATE = """Analyze this reading log image carefully. Extract the following information exactly as written:

1. The student's full name
2. The grade level
3. The homeroom teacher's name

Then for each day listed on the reading log ({days}), extract the reading time as a number of minutes (integer only, e.g. if it says "10 min" or "10mi" return 10). If a day has no reading time filled in, use 0.

Return all information in the structured JSON format requested."""


class PromptBuilder:
    """Builds the instructions for a reading log extraction request."""

    def __init__(self, days: Sequence[Tuple[str, str]] = REPORT_DAYS):
        self.days = tuple(days)

    def build(self) -> str:
        """Build the extraction instructions for the configured form days."""
        days = ", ".join(f"{day} {date}" for day, date in self.days)
        return PROMPT_TEMPLATE.format(days=days)
