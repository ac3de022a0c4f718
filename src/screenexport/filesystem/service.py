"""File naming and output directory helpers for exported screens."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from screenexport.api.views import ImageFormat
from screenexport.document.views import ScreenRecord

logger = logging.getLogger(__name__)

SCREEN_FILE_PREFIX = "screen-"

# Characters that are invalid in file names on at least one major platform
_INVALID_FILENAME_CHARS = re.compile(r'[/\\?%*:|"<>]')


def sanitize_file_name(name: str) -> str:
    """Replace each invalid file name character with '-'. Everything else is kept."""
    return _INVALID_FILENAME_CHARS.sub("-", name)


def build_file_stem(screen: ScreenRecord, include_dimensions: bool = False) -> str:
    """
    Build the file name (without extension) for a screen.

    Pattern: screen-<sanitized-name>[-<width>x<height>]
    """
    stem = f"{SCREEN_FILE_PREFIX}{sanitize_file_name(screen.name)}"
    if include_dimensions and screen.bounding_box is not None:
        stem += f"-{screen.bounding_box.size_label}"
    return stem


def get_unique_file_path(base_path: str | Path, extension: ImageFormat | str) -> Path:
    """
    Return a path that does not exist yet.

    Tries <base>.<ext>, then <base>-1.<ext>, <base>-2.<ext>, ...
    The check is not atomic; callers must not write concurrently.
    """
    base_path = str(base_path)
    extension = str(extension)
    file_path = Path(f"{base_path}.{extension}")
    counter = 1
    while file_path.exists():
        file_path = Path(f"{base_path}-{counter}.{extension}")
        counter += 1
    return file_path


def ensure_output_dir(output_dir: str | Path) -> Path:
    """Create the output directory (and parents) if it doesn't exist."""
    path = Path(output_dir)
    if not path.exists():
        logger.debug(f"Creating output directory {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path
