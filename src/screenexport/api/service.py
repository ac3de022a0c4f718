"""Figma REST API client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from screenexport.api.views import FIGMA_API_URL, ImageFormat, ImagesResponse
from screenexport.document.views import FigmaFile
from screenexport.exceptions import DocumentFetchError

if TYPE_CHECKING:
    from screenexport.config import ExportConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class FigmaClient:
    """
    Async client for the two Figma endpoints the exporter needs.

    Fetching the document is fatal on failure; resolving a render URL is not,
    it logs and returns None so the caller can try the next format.
    """

    def __init__(
        self,
        token: str,
        file_key: str,
        base_url: str = FIGMA_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            token: Personal access token, sent as X-Figma-Token
            file_key: Key of the design file to export from
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.file_key = file_key
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"X-Figma-Token": token},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ExportConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> FigmaClient:
        return cls(
            token=config.token,
            file_key=config.file_key,
            base_url=config.api_url,
            transport=transport,
        )

    async def __aenter__(self) -> FigmaClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_file(self) -> FigmaFile:
        """
        Fetch the full document tree of the design file.

        Raises:
            DocumentFetchError: On any transport, HTTP or payload error
        """
        logger.info(f"Fetching Figma file {self.file_key}")
        try:
            response = await self._client.get(f"/files/{self.file_key}")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise DocumentFetchError(
                message=f"Error fetching Figma file: {e.response.text}",
                status_code=e.response.status_code,
                file_key=self.file_key,
            ) from e
        except httpx.HTTPError as e:
            raise DocumentFetchError(
                message=f"Error fetching Figma file: {e}",
                file_key=self.file_key,
            ) from e
        except ValueError as e:
            raise DocumentFetchError(
                message=f"Figma file response is not valid JSON: {e}",
                file_key=self.file_key,
            ) from e

        try:
            figma_file = FigmaFile.model_validate(data)
        except ValidationError as e:
            raise DocumentFetchError(
                message=f"Unexpected Figma file structure: {e}",
                file_key=self.file_key,
            ) from e

        logger.debug(f"Fetched Figma file '{figma_file.name}' with {len(figma_file.pages)} page(s)")
        return figma_file

    async def get_image_url(
        self,
        node_id: str,
        image_format: ImageFormat | str = ImageFormat.PNG,
    ) -> str | None:
        """
        Ask the images endpoint to render one node.

        Args:
            node_id: Node to render
            image_format: Render format

        Returns:
            A short-lived download URL, or None if the render failed
        """
        params = {"ids": node_id, "format": str(image_format)}
        try:
            response = await self._client.get(f"/images/{self.file_key}", params=params)
            response.raise_for_status()
            result = ImagesResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Error getting image URL for {node_id} ({image_format}): "
                f"[{e.response.status_code}] {e.response.text}"
            )
            return None
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers both invalid JSON and pydantic validation errors
            logger.error(f"Error getting image URL for {node_id} ({image_format}): {e}")
            return None

        if result.err:
            logger.error(f"Figma could not render {node_id} ({image_format}): {result.err}")
            return None

        return result.images.get(node_id)
