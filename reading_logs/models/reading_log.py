"""Data models for reading logs extracted from form images."""

from collections import Counter
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


# (day, date) pairs printed on the form, in column order
REPORT_DAYS: Tuple[Tuple[str, str], ...] = (
    ("Friday", "1/30"),
    ("Saturday", "1/31"),
    ("Sunday", "2/1"),
    ("Monday", "2/2"),
    ("Tuesday", "2/3"),
    ("Wednesday", "2/4"),
    ("Thursday", "2/5"),
)


class ReadingEntry(BaseModel):
    """Reading time for a single day on the log"""

    model_config = ConfigDict(frozen=True)

    day: str = Field(..., description="Day of the week (e.g. Friday)")
    date: str = Field(..., description="The date in M/D format (e.g. 1/30)")
    minutes: int = Field(
        0,
        ge=0,
        description="Minutes read; 0 if not filled in or blank",
    )


class ReadingLog(BaseModel):
    """Structured data extracted from one reading log image"""

    model_config = ConfigDict(frozen=True)

    full_name: str = Field(..., description="Student full name as written")
    grade: str = Field(..., description="Grade level (e.g. Kinder, 1st, 2nd)")
    homeroom_teacher: str = Field(..., description="Homeroom teacher name")
    reading_entries: List[ReadingEntry] = Field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        """Sum of minutes across every entry, listed on the report or not"""
        return sum(entry.minutes for entry in self.reading_entries)

    def minutes_for(self, date: str) -> int:
        """Minutes for the first entry matching ``date``, 0 if absent.

        Later entries with the same date are ignored.
        """
        for entry in self.reading_entries:
            if entry.date == date:
                return entry.minutes
        return 0

    def duplicate_dates(self) -> List[str]:
        """Dates that appear on more than one entry"""
        counts = Counter(entry.date for entry in self.reading_entries)
        return [date for date, count in counts.items() if count > 1]
