"""Export result models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from screenexport.api.views import ImageFormat
from screenexport.document.views import ScreenRecord, TargetDimensions


class ScreenExportResult(BaseModel):
    """Outcome of exporting one screen."""

    model_config = ConfigDict(frozen=True)

    screen: ScreenRecord
    file_path: Path | None = None
    image_format: ImageFormat | None = None

    @property
    def success(self) -> bool:
        return self.file_path is not None


class ExportReport(BaseModel):
    """Outcome of an export run, in screen order."""

    output_dir: Path
    file_name: str = ''
    target_dimensions: TargetDimensions | None = None
    results: list[ScreenExportResult] = Field(default_factory=list)

    @property
    def screens_found(self) -> int:
        return len(self.results)

    @property
    def exported(self) -> list[ScreenExportResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[ScreenExportResult]:
        return [r for r in self.results if not r.success]
