"""Delay policies applied between remote calls."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from screenexport.config import ExportConfig

logger = logging.getLogger(__name__)


class DelayPolicy(ABC):
    """Decides how long to wait before the next remote call."""

    @abstractmethod
    async def wait_after_failed_format(self) -> None:
        """Wait after a format attempt that did not produce a file."""

    @abstractmethod
    async def wait_after_screen(self) -> None:
        """Wait after a screen is finished, whatever the outcome."""


class FixedDelayPolicy(DelayPolicy):
    """Static delays to stay under the API rate limit."""

    def __init__(self, format_delay: float = 0.1, screen_delay: float = 0.2):
        if format_delay < 0 or screen_delay < 0:
            raise ValueError("Delays must be non-negative")
        self.format_delay = format_delay
        self.screen_delay = screen_delay

    @classmethod
    def from_config(cls, config: ExportConfig) -> FixedDelayPolicy:
        return cls(format_delay=config.format_delay, screen_delay=config.api_delay)

    async def wait_after_failed_format(self) -> None:
        logger.debug(f"Waiting {self.format_delay}s before the next format")
        await asyncio.sleep(self.format_delay)

    async def wait_after_screen(self) -> None:
        logger.debug(f"Waiting {self.screen_delay}s before the next screen")
        await asyncio.sleep(self.screen_delay)

    def __repr__(self) -> str:
        return f"FixedDelayPolicy(format_delay={self.format_delay}, screen_delay={self.screen_delay})"
