"""JSON schema for structured reading log output.

Authored by hand to mirror reading_logs.models.reading_log. Structured
outputs require every object to forbid additional properties and list all
of its keys as required.
"""

from typing import Any, Dict

READING_ENTRY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "required": ["day", "date", "minutes"],
    "properties": {
        "day": {
            "type": "string",
            "description": "Day of the week (e.g. Friday)",
        },
        "date": {
            "type": "string",
            "description": "The date in M/D format (e.g. 1/30)",
        },
        "minutes": {
            "type": "integer",
            "description": (
                "Number of minutes read as an integer. "
                "Use 0 if not filled in or blank."
            ),
        },
    },
}

READING_LOG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "required": ["full_name", "grade", "homeroom_teacher", "reading_entries"],
    "properties": {
        "full_name": {
            "type": "string",
            "description": "The student full name as written on the form",
        },
        "grade": {
            "type": "string",
            "description": "The student grade level (e.g. Kinder or 1st or 2nd)",
        },
        "homeroom_teacher": {
            "type": "string",
            "description": "The homeroom teacher name",
        },
        "reading_entries": {
            "type": "array",
            "description": "Reading time entries for each day on the log",
            "items": READING_ENTRY_SCHEMA,
        },
    },
}
