"""Unit tests for checkpoint service"""

import json
from unittest.mock import patch

import pytest

from reading_logs.models.checkpoint import ProgressState
from reading_logs.models.reading_log import ReadingEntry, ReadingLog
from reading_logs.services.checkpoint_service import CheckpointService
from reading_logs.utils.exceptions import CheckpointSaveError


@pytest.fixture
def progress_file(tmp_path):
    return tmp_path / ".progress.json"


@pytest.fixture
def checkpoint_service(progress_file):
    return CheckpointService(progress_file)


@pytest.fixture
def record():
    return ReadingLog(
        full_name="Ava Lopez",
        grade="1st",
        homeroom_teacher="Ms. Park",
        reading_entries=[ReadingEntry(day="Friday", date="1/30", minutes=10)],
    )


def test_load_missing_file_starts_fresh(checkpoint_service):
    state = checkpoint_service.load()
    assert state.completed == {}
    assert state.errors == {}


def test_load_corrupted_file_starts_fresh(checkpoint_service, progress_file):
    progress_file.write_text("{ invalid json }")
    state = checkpoint_service.load()
    assert state.completed == {}
    assert state.errors == {}


def test_load_wrong_shape_starts_fresh(checkpoint_service, progress_file):
    progress_file.write_text(json.dumps({"completed": {"a.jpg": {"grade": 1}}}))
    state = checkpoint_service.load()
    assert state.completed == {}


def test_load_non_object_starts_fresh(checkpoint_service, progress_file):
    progress_file.write_text("[1, 2, 3]")
    assert checkpoint_service.load().completed == {}


def test_save_and_load_round_trip(checkpoint_service, record):
    state = ProgressState(completed={"a.jpg": record}, errors={"b.jpg": "boom"})
    checkpoint_service.save(state)

    loaded = checkpoint_service.load()
    assert loaded.completed == {"a.jpg": record}
    assert loaded.errors == {"b.jpg": "boom"}


def test_file_format(checkpoint_service, progress_file, record):
    checkpoint_service.save(ProgressState(completed={"a.jpg": record}))

    data = json.loads(progress_file.read_text())
    assert set(data) == {"completed", "errors"}
    entry = data["completed"]["a.jpg"]
    assert entry["full_name"] == "Ava Lopez"
    assert entry["reading_entries"] == [{"day": "Friday", "date": "1/30", "minutes": 10}]


def test_atomic_save_leaves_no_temp_file(checkpoint_service, progress_file):
    checkpoint_service.save(ProgressState())
    assert progress_file.exists()
    assert list(progress_file.parent.glob("*.tmp")) == []


def test_failed_save_keeps_previous_file(checkpoint_service, progress_file, record):
    checkpoint_service.save(ProgressState(completed={"a.jpg": record}))

    with patch(
        "reading_logs.services.checkpoint_service.os.replace",
        side_effect=OSError("disk full"),
    ):
        with pytest.raises(CheckpointSaveError):
            checkpoint_service.save(ProgressState())

    assert "a.jpg" in json.loads(progress_file.read_text())["completed"]
    assert list(progress_file.parent.glob("*.tmp")) == []


def test_save_to_missing_directory_raises(tmp_path):
    service = CheckpointService(tmp_path / "missing" / ".progress.json")
    with pytest.raises(CheckpointSaveError):
        service.save(ProgressState())


def test_mark_success_clears_error(checkpoint_service, record):
    state = ProgressState(errors={"a.jpg": "API call failed"})

    assert checkpoint_service.mark_success(state, "a.jpg", record) is True

    assert state.completed["a.jpg"] == record
    assert "a.jpg" not in state.errors
    reloaded = checkpoint_service.load()
    assert "a.jpg" in reloaded.completed
    assert reloaded.errors == {}


def test_mark_failure_keeps_prior_success(checkpoint_service, record):
    state = ProgressState(completed={"a.jpg": record})

    assert checkpoint_service.mark_failure(state, "a.jpg", "boom") is True

    assert state.completed["a.jpg"] == record
    assert state.errors["a.jpg"] == "boom"


def test_mark_failure_persists(checkpoint_service):
    state = ProgressState()
    checkpoint_service.mark_failure(state, "b.jpg", "sips conversion failed")

    reloaded = checkpoint_service.load()
    assert reloaded.errors == {"b.jpg": "sips conversion failed"}
    assert reloaded.completed == {}


def test_mark_success_save_failure_is_not_fatal(tmp_path, record):
    service = CheckpointService(tmp_path / "missing" / ".progress.json")
    state = ProgressState()

    assert service.mark_success(state, "a.jpg", record) is False
    # In-memory state is still updated
    assert "a.jpg" in state.completed


def test_durability_counts_successes_only(checkpoint_service, record):
    state = checkpoint_service.load()
    for i in range(5):
        name = f"{i}.jpg"
        if i % 2 == 0:
            checkpoint_service.mark_success(state, name, record)
        else:
            checkpoint_service.mark_failure(state, name, "boom")

    reloaded = checkpoint_service.load()
    assert len(reloaded.completed) == 3
    assert len(reloaded.errors) == 2
