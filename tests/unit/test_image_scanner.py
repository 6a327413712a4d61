"""Tests for the image catalog scanner."""

import pytest

from reading_logs.services.image_scanner import IMAGE_EXTENSIONS, find_images, is_image
from reading_logs.utils.exceptions import DirectoryReadError


@pytest.fixture
def image_dir(tmp_path):
    for name in [
        "b.jpg",
        "a.PNG",
        "c.heic",
        "d.JPEG",
        "e.gif",
        "f.webp",
        "notes.txt",
        "scan.pdf",
        "photo.jpg.bak",
        ".progress.json",
        "reading_logs.csv",
    ]:
        (tmp_path / name).write_bytes(b"x")
    sub = tmp_path / "nested.jpg"
    sub.mkdir()
    (sub / "inner.jpg").write_bytes(b"x")
    return tmp_path


def test_finds_only_allowed_extensions(image_dir):
    names = [p.name for p in find_images(image_dir)]
    assert set(names) == {"a.PNG", "b.jpg", "c.heic", "d.JPEG", "e.gif", "f.webp"}


def test_results_are_sorted_by_name(image_dir):
    names = [p.name for p in find_images(image_dir)]
    assert names == sorted(names)


def test_skips_directories_and_does_not_recurse(image_dir):
    names = [p.name for p in find_images(image_dir)]
    assert "nested.jpg" not in names
    assert "inner.jpg" not in names


def test_empty_directory(tmp_path):
    assert find_images(tmp_path) == []


def test_missing_directory_raises(tmp_path):
    with pytest.raises(DirectoryReadError):
        find_images(tmp_path / "missing")


def test_file_instead_of_directory_raises(tmp_path):
    path = tmp_path / "a.jpg"
    path.write_bytes(b"x")
    with pytest.raises(DirectoryReadError):
        find_images(path)


@pytest.mark.parametrize("ext", sorted(IMAGE_EXTENSIONS))
def test_is_image_case_insensitive(tmp_path, ext):
    assert is_image(tmp_path / f"log{ext.upper()}")
    assert is_image(tmp_path / f"log{ext}")
