"""Screen export orchestration."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from screenexport.api.service import FigmaClient
from screenexport.api.views import ImageFormat
from screenexport.config import ExportConfig
from screenexport.document.service import extract_screen_nodes
from screenexport.document.views import FigmaFile, ScreenRecord
from screenexport.downloads.service import ImageDownloader
from screenexport.exceptions import ConfigurationError
from screenexport.export.views import ExportReport, ScreenExportResult
from screenexport.filesystem.service import build_file_stem, ensure_output_dir, get_unique_file_path
from screenexport.scheduling import DelayPolicy, FixedDelayPolicy

logger = logging.getLogger(__name__)


class ScreenExporter:
    """
    Exports every screen of a Figma file as an image.

    One screen at a time, one format at a time: fetch the document, filter the
    FRAME nodes, then for each screen try the configured formats in order and
    keep the first one that downloads. Only a failed document fetch stops the
    run; every other failure is logged and the run moves on.
    """

    def __init__(
        self,
        config: ExportConfig,
        client: FigmaClient,
        downloader: ImageDownloader,
        delay_policy: DelayPolicy | None = None,
    ):
        self.config = config
        self.client = client
        self.downloader = downloader
        self.delay_policy = delay_policy or FixedDelayPolicy.from_config(config)

    async def run(self) -> ExportReport:
        """
        Run a full export.

        Returns:
            Report with one result per matched screen, in document order

        Raises:
            ConfigurationError: If the output directory cannot be created
            DocumentFetchError: If the design file cannot be fetched
        """
        try:
            output_dir = ensure_output_dir(self.config.output_dir)
        except OSError as e:
            raise ConfigurationError(f"Cannot create output directory {self.config.output_dir}: {e}") from e

        figma_file = await self.client.fetch_file()
        screens = self.find_screens(figma_file)

        report = ExportReport(
            output_dir=output_dir,
            file_name=figma_file.name,
            target_dimensions=self.config.target_dimensions,
        )

        target = self.config.target_dimensions
        if target:
            logger.info(f"Found {len(screens)} screen(s) with dimensions {target}px to export.")
        else:
            logger.info(f"Found {len(screens)} screen(s) to export.")

        if not screens:
            if target:
                logger.warning(f"No screens found with dimensions {target}px!")
                logger.warning("Check the target dimensions or disable the size filter to export all screens.")
            else:
                logger.warning("No screens found! Make sure your Figma file contains FRAME nodes representing screens.")
            return report

        for screen in screens:
            result = await self.export_screen(screen)
            report.results.append(result)
            await self.delay_policy.wait_after_screen()

        logger.info(f"Export completed! Check the {output_dir} directory for your screen exports.")
        return report

    def find_screens(self, figma_file: FigmaFile) -> list[ScreenRecord]:
        """Filter the screens to export out of a fetched file."""
        return extract_screen_nodes(figma_file.pages, self.config.target_dimensions)

    async def export_screen(self, screen: ScreenRecord) -> ScreenExportResult:
        """Export one screen, trying each configured format until one succeeds."""
        file_stem = build_file_stem(screen, self.config.include_dimensions)
        logger.info(f"Exporting screen: {screen.name}")
        if screen.bounding_box:
            logger.info(f"  Dimensions: {screen.bounding_box.size_label}px")

        for image_format in self.config.image_formats:
            file_path = await self._export_as(screen, image_format, file_stem)
            if file_path is not None:
                logger.info(f"  ✓ Downloaded as {image_format.value.upper()}: {file_path.name}")
                return ScreenExportResult(screen=screen, file_path=file_path, image_format=image_format)
            await self.delay_policy.wait_after_failed_format()

        logger.warning(f"  ✗ Failed to download screen: {screen.name}")
        return ScreenExportResult(screen=screen)

    async def _export_as(self, screen: ScreenRecord, image_format: ImageFormat, file_stem: str) -> Path | None:
        url = await self.client.get_image_url(screen.id, image_format)
        if not url:
            return None

        try:
            file_path = get_unique_file_path(self.config.output_dir / file_stem, image_format)
        except (OSError, ValueError) as e:
            logger.error(f"Cannot use file name {file_stem!r}: {e}")
            return None

        if await self.downloader.download(url, file_path):
            return file_path
        return None


async def run_export(
    config: ExportConfig,
    delay_policy: DelayPolicy | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ExportReport:
    """Open the API and download clients, run one export, and close them."""
    async with FigmaClient.from_config(config, transport=transport) as client:
        async with ImageDownloader(transport=transport) as downloader:
            exporter = ScreenExporter(config, client, downloader, delay_policy)
            return await exporter.run()


async def list_screens(
    config: ExportConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ScreenRecord]:
    """Fetch the file and return the screens that would be exported."""
    async with FigmaClient.from_config(config, transport=transport) as client:
        figma_file = await client.fetch_file()
    return extract_screen_nodes(figma_file.pages, config.target_dimensions)
