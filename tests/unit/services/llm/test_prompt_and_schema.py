"""Tests for the extraction prompt and output schema."""

from reading_logs.models.reading_log import REPORT_DAYS, ReadingLog
from reading_logs.services.llm.prompt_builder import PromptBuilder
from reading_logs.services.llm.schema import READING_ENTRY_SCHEMA, READING_LOG_SCHEMA


def test_prompt_lists_every_form_day():
    prompt = PromptBuilder().build()
    for day, date in REPORT_DAYS:
        assert f"{day} {date}" in prompt
    assert "use 0" in prompt


def test_prompt_custom_days():
    prompt = PromptBuilder(days=[("Monday", "3/2")]).build()
    assert "(Monday 3/2)" in prompt


def test_schema_matches_model_fields():
    assert set(READING_LOG_SCHEMA["properties"]) == set(ReadingLog.model_fields)
    assert set(READING_LOG_SCHEMA["required"]) == set(ReadingLog.model_fields)
    assert READING_LOG_SCHEMA["properties"]["reading_entries"]["items"] is (
        READING_ENTRY_SCHEMA
    )


def test_schema_forbids_additional_properties():
    assert READING_LOG_SCHEMA["additionalProperties"] is False
    assert READING_ENTRY_SCHEMA["additionalProperties"] is False
    assert READING_ENTRY_SCHEMA["properties"]["minutes"]["type"] == "integer"
