"""File system module for exported screen files."""

from .service import (
    SCREEN_FILE_PREFIX,
    build_file_stem,
    ensure_output_dir,
    get_unique_file_path,
    sanitize_file_name,
)

__all__ = [
    "SCREEN_FILE_PREFIX",
    "build_file_stem",
    "ensure_output_dir",
    "get_unique_file_path",
    "sanitize_file_name",
]
