"""Image download service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class ImageDownloader:
    """
    Downloads rendered images and writes them to disk.

    Render URLs point at pre-signed storage, so no Figma credentials are sent.
    Failures never raise: they are logged and reported as False.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> ImageDownloader:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def download(self, url: str | None, file_path: str | Path) -> bool:
        """
        Download url and write the bytes to file_path.

        Args:
            url: Render URL; None or empty counts as a failure
            file_path: Exact destination, already made unique by the caller

        Returns:
            True if the file was written
        """
        file_path = Path(file_path)
        if not url:
            logger.error(f"Skipping {file_path}: Invalid or empty URL")
            return False

        try:
            response = await self._client.get(url)
            response.raise_for_status()
            file_path.write_bytes(response.content)
        except (httpx.HTTPError, OSError, ValueError) as e:
            logger.error(f"Error downloading {file_path}: {e}")
            return False

        logger.info(f"Downloaded: {file_path}")
        return True
