"""Figma API module."""

from .service import FigmaClient
from .views import FIGMA_API_URL, ImageFormat, ImagesResponse

__all__ = ["FIGMA_API_URL", "FigmaClient", "ImageFormat", "ImagesResponse"]
