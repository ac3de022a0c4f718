"""Export orchestration module."""

from .service import ScreenExporter, list_screens, run_export
from .views import ExportReport, ScreenExportResult

__all__ = ["ExportReport", "ScreenExportResult", "ScreenExporter", "list_screens", "run_export"]
