"""screenexport - Export Figma screens (FRAME nodes) as rendered images."""

__version__ = "0.1.0"

from screenexport.api import FigmaClient, ImageFormat
from screenexport.config import ExportConfig, load_export_config
from screenexport.document import (
    BoundingBox,
    DocumentNode,
    FigmaFile,
    ScreenRecord,
    TargetDimensions,
    extract_screen_nodes,
)
from screenexport.downloads import ImageDownloader
from screenexport.exceptions import (
    ConfigurationError,
    DocumentFetchError,
    FigmaAPIError,
    ScreenExportError,
)
from screenexport.export import ExportReport, ScreenExporter, ScreenExportResult, list_screens, run_export
from screenexport.filesystem import build_file_stem, get_unique_file_path, sanitize_file_name
from screenexport.scheduling import DelayPolicy, FixedDelayPolicy

__all__ = [
    "BoundingBox",
    "ConfigurationError",
    "DelayPolicy",
    "DocumentFetchError",
    "DocumentNode",
    "ExportConfig",
    "ExportReport",
    "FigmaAPIError",
    "FigmaClient",
    "FigmaFile",
    "FixedDelayPolicy",
    "ImageDownloader",
    "ImageFormat",
    "ScreenExportError",
    "ScreenExportResult",
    "ScreenExporter",
    "ScreenRecord",
    "TargetDimensions",
    "__version__",
    "build_file_stem",
    "extract_screen_nodes",
    "get_unique_file_path",
    "list_screens",
    "load_export_config",
    "run_export",
    "sanitize_file_name",
]
