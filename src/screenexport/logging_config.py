"""Logging setup for screenexport."""

import logging
import os
import sys
from typing import TextIO

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_configured = False


def setup_logging(
    stream: TextIO | None = None,
    log_level: str | None = None,
    force_setup: bool = False,
) -> logging.Logger:
    """
    Configure the screenexport logger.

    Args:
        stream: Stream for log output (defaults to stderr)
        log_level: Level name; falls back to SCREENEXPORT_LOGGING_LEVEL, then 'info'
        force_setup: Replace handlers even if logging was configured already

    Returns:
        The package logger
    """
    global _configured

    logger = logging.getLogger('screenexport')
    if _configured and not force_setup:
        return logger

    level_name = (log_level or os.getenv('SCREENEXPORT_LOGGING_LEVEL', 'info')).upper()
    level = getattr(logging, level_name, logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger('httpx').setLevel(logging.WARNING)

    _configured = True
    return logger
