"""Format normalizer.

HEIC photos (the iPhone default) are converted to JPEG with an external
utility before upload; the extraction API accepts only standard raster
formats. On macOS the utility is ``sips``. The command is configurable so
hosts with ImageMagick or libheif tools can swap it in.
"""

import base64
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

import structlog

from reading_logs.models.config import ConversionSettings
from reading_logs.services.image_scanner import HEIC_EXTENSION
from reading_logs.utils.exceptions import NormalizationError

logger = structlog.get_logger()

MEDIA_TYPES: Dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def is_heic(path: Path) -> bool:
    return path.suffix.lower() == HEIC_EXTENSION


def encode_image(path: Path) -> Tuple[str, str]:
    """
    Read an image and return its media type and base64 encoding.

    Raises:
        NormalizationError: Unsupported extension or unreadable file
    """
    ext = path.suffix.lower()
    media_type = MEDIA_TYPES.get(ext)
    if media_type is None:
        raise NormalizationError(f"unsupported image type: {ext}")

    try:
        data = path.read_bytes()
    except OSError as e:
        raise NormalizationError(f"cannot read image {path.name}: {e}") from e

    return media_type, base64.standard_b64encode(data).decode("ascii")


class FormatNormalizer:
    """Converts HEIC images to JPEG; passes standard formats through."""

    def __init__(self, settings: Optional[ConversionSettings] = None):
        self.settings = settings or ConversionSettings()

    @property
    def executable(self) -> str:
        return self.settings.command[0]

    def validate_setup(self) -> bool:
        """Check if the conversion utility is available in PATH."""
        return shutil.which(self.executable) is not None

    def normalize(self, path: Path) -> Path:
        """
        Return a path to a standard-format version of the image.

        For HEIC input a temporary JPEG is created; the caller owns it and
        must delete it. Any other supported format is returned unchanged.

        Raises:
            NormalizationError: Converter missing, failed, or timed out
        """
        if not is_heic(path):
            return path

        if not self.validate_setup():
            raise NormalizationError(
                f"{self.executable} not found in PATH; cannot convert {path.name}"
            )

        with tempfile.NamedTemporaryFile(
            prefix="reading-log-", suffix=".jpg", delete=False
        ) as tmp_file:
            jpg_path = Path(tmp_file.name)

        cmd = [*self.settings.command, str(path)]
        if self.settings.output_flag:
            cmd.append(self.settings.output_flag)
        cmd.append(str(jpg_path))

        try:
            subprocess.run(
                cmd,
                check=True,
                timeout=self.settings.timeout_seconds,
                capture_output=True,
            )
        except subprocess.TimeoutExpired:
            jpg_path.unlink(missing_ok=True)
            raise NormalizationError(
                f"{self.executable} conversion timed out "
                f"({self.settings.timeout_seconds}s)"
            )
        except subprocess.CalledProcessError as e:
            jpg_path.unlink(missing_ok=True)
            output = b"".join(part for part in (e.stdout, e.stderr) if part)
            raise NormalizationError(
                f"{self.executable} conversion failed: {e}\n"
                f"{output.decode(errors='replace').strip()}"
            ) from e
        except OSError as e:
            jpg_path.unlink(missing_ok=True)
            raise NormalizationError(f"{self.executable} could not run: {e}") from e

        logger.debug("heic_converted", source=path.name, output=str(jpg_path))
        return jpg_path

    @contextmanager
    def normalized(self, path: Path) -> Iterator[Path]:
        """Normalize ``path`` and delete any temporary file on exit."""
        processed = self.normalize(path)
        try:
            yield processed
        finally:
            if processed != path:
                processed.unlink(missing_ok=True)

    def load(self, path: Path) -> Tuple[str, str]:
        """Normalize and encode an image; the temp file is gone on return."""
        with self.normalized(path) as processed:
            return encode_image(processed)
