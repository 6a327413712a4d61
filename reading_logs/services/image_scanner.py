"""Image catalog scanner.

Lists the reading log photos in a directory. Only the top level is scanned;
subdirectories are never entered.
"""

from pathlib import Path
from typing import FrozenSet, List, Union

import structlog

from reading_logs.utils.exceptions import DirectoryReadError

logger = structlog.get_logger()

HEIC_EXTENSION = ".heic"

STANDARD_EXTENSIONS: FrozenSet[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".webp"}
)

IMAGE_EXTENSIONS: FrozenSet[str] = STANDARD_EXTENSIONS | {HEIC_EXTENSION}


def is_image(path: Path) -> bool:
    """Check whether the file extension is on the allow-list (case-insensitive)"""
    return path.suffix.lower() in IMAGE_EXTENSIONS


def find_images(directory: Union[str, Path]) -> List[Path]:
    """
    Find the supported image files in a directory.

    Args:
        directory: Directory to scan

    Returns:
        Image paths sorted by filename

    Raises:
        DirectoryReadError: If the directory cannot be listed
    """
    directory = Path(directory)

    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise DirectoryReadError(f"Cannot read directory {directory}: {e}") from e

    images = sorted(
        (entry for entry in entries if entry.is_file() and is_image(entry)),
        key=lambda p: p.name,
    )

    logger.debug(
        "images_scanned",
        directory=str(directory),
        entries=len(entries),
        images=len(images),
    )

    return images
