"""Image download module."""

from .service import ImageDownloader

__all__ = ["ImageDownloader"]
