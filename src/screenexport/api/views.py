"""Figma REST API models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

FIGMA_API_URL = "https://api.figma.com/v1"


class ImageFormat(str, Enum):
    """Render formats supported by the images endpoint.

    The value is also used as the file extension.
    """

    PNG = "png"
    JPG = "jpg"
    SVG = "svg"
    PDF = "pdf"

    def __str__(self) -> str:
        return self.value


class ImagesResponse(BaseModel):
    """Response of the images endpoint: node id -> render URL (or null)."""

    model_config = ConfigDict(extra="allow")

    err: str | None = None
    status: int | None = None
    images: dict[str, str | None] = Field(default_factory=dict)
