"""CSV report of every successfully parsed reading log."""

import csv
import os
from pathlib import Path
from typing import List, Mapping, Union

import structlog

from reading_logs.models.reading_log import REPORT_DAYS, ReadingLog
from reading_logs.utils.exceptions import ExportWriteError, NoRecordsError

logger = structlog.get_logger()

IDENTITY_COLUMNS = ["Full Name", "Grade", "Homeroom Teacher"]
DAY_COLUMNS = [f"{day} {date}" for day, date in REPORT_DAYS]
TOTAL_COLUMN = "Total Minutes"
HEADER = IDENTITY_COLUMNS + DAY_COLUMNS + [TOTAL_COLUMN]


def format_minutes(record: ReadingLog, date: str) -> str:
    """Cell value for one day: the minutes, or empty when absent or zero"""
    minutes = record.minutes_for(date)
    return str(minutes) if minutes > 0 else ""


def build_row(record: ReadingLog) -> List[str]:
    return [
        record.full_name,
        record.grade,
        record.homeroom_teacher,
        *(format_minutes(record, date) for _, date in REPORT_DAYS),
        str(record.total_minutes),
    ]


class ReportExporter:
    """Writes reading logs to a CSV file, one row per student form."""

    def __init__(self, output_file: Union[str, Path] = "reading_logs.csv"):
        self.output_file = Path(output_file)

    def export(self, records: Mapping[str, ReadingLog]) -> int:
        """
        Write the report.

        Args:
            records: Parsed logs keyed by source filename; rows follow
                filename order

        Returns:
            Number of rows written

        Raises:
            NoRecordsError: If there is nothing to export (no file is created)
            ExportWriteError: If the file cannot be written
        """
        if not records:
            raise NoRecordsError("No reading logs were successfully parsed")

        # Atomic write: write to temp file, then rename
        temp_file = self.output_file.with_name(self.output_file.name + ".tmp")

        try:
            with open(temp_file, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(HEADER)
                for filename in sorted(records):
                    writer.writerow(build_row(records[filename]))

            os.replace(temp_file, self.output_file)

        except (OSError, UnicodeError) as e:
            temp_file.unlink(missing_ok=True)
            raise ExportWriteError(
                f"could not write {self.output_file}: {e}"
            ) from e

        logger.info("report_written", path=str(self.output_file), rows=len(records))
        return len(records)
