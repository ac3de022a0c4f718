"""Configuration system for screenexport.

Settings come from the environment (and a local .env file) and can be
overridden explicitly, e.g. by CLI options. The result is a single immutable
ExportConfig that is passed to every component.
"""

import logging
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from screenexport.api.views import FIGMA_API_URL, ImageFormat
from screenexport.document.views import TargetDimensions
from screenexport.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = './exported-projects/screens'

_DIMENSIONS_RE = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*[xX]\s*(\d+(?:\.\d+)?)\s*$')


class EnvConfig(BaseSettings):
    """Environment variable configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra='allow'
    )

    # Figma access
    FIGMA_TOKEN: str = Field(default='')
    FIGMA_FILE_ID: str = Field(default='')
    FIGMA_API_URL: str = Field(default=FIGMA_API_URL)

    # Export behaviour
    SCREENEXPORT_OUTPUT_DIR: str = Field(default=DEFAULT_OUTPUT_DIR)
    SCREENEXPORT_IMAGE_FORMATS: str = Field(default='png')
    SCREENEXPORT_INCLUDE_DIMENSIONS: bool = Field(default=False)
    SCREENEXPORT_API_DELAY_MS: int = Field(default=200)
    SCREENEXPORT_TARGET_WIDTH: float | None = Field(default=None)
    SCREENEXPORT_TARGET_HEIGHT: float | None = Field(default=None)

    # Logging
    SCREENEXPORT_LOGGING_LEVEL: str = Field(default='info')


class ExportConfig(BaseModel):
    """Immutable export configuration, resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1, repr=False)
    file_key: str = Field(min_length=1)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    # Preferred image formats, in order of preference
    image_formats: tuple[ImageFormat, ...] = (ImageFormat.PNG,)
    include_dimensions: bool = False
    # Seconds to wait between screens
    api_delay: float = Field(default=0.2, ge=0)
    # Seconds to wait after a format attempt that did not succeed
    format_delay: float = Field(default=0.1, ge=0)
    # None exports every frame
    target_dimensions: TargetDimensions | None = None
    api_url: str = FIGMA_API_URL

    @field_validator('image_formats')
    @classmethod
    def _require_formats(cls, value: tuple[ImageFormat, ...]) -> tuple[ImageFormat, ...]:
        if not value:
            raise ValueError('at least one image format is required')
        return value


def parse_image_formats(value: str) -> tuple[ImageFormat, ...]:
    """Parse a comma separated format list, e.g. 'png,jpg'. Order is kept."""
    formats: list[ImageFormat] = []
    for part in value.split(','):
        part = part.strip().lower()
        if not part:
            continue
        if part == 'jpeg':
            part = 'jpg'
        try:
            formats.append(ImageFormat(part))
        except ValueError:
            allowed = ', '.join(f.value for f in ImageFormat)
            raise ConfigurationError(f'Unsupported image format {part!r}. Allowed: {allowed}') from None
    return tuple(formats)


def parse_dimensions(value: str) -> TargetDimensions:
    """Parse a 'WIDTHxHEIGHT' string, e.g. '375x812'."""
    match = _DIMENSIONS_RE.match(value)
    if not match:
        raise ConfigurationError(f'Invalid dimensions {value!r}, expected WIDTHxHEIGHT (e.g. 375x812)')
    return TargetDimensions(width=float(match.group(1)), height=float(match.group(2)))


def _target_dimensions_from_env(env_config: EnvConfig) -> TargetDimensions | None:
    width = env_config.SCREENEXPORT_TARGET_WIDTH
    height = env_config.SCREENEXPORT_TARGET_HEIGHT
    if width is None and height is None:
        return None
    if width is None or height is None:
        raise ConfigurationError(
            'SCREENEXPORT_TARGET_WIDTH and SCREENEXPORT_TARGET_HEIGHT must be set together'
        )
    return TargetDimensions(width=width, height=height)


def load_export_config(env_config: EnvConfig | None = None, **overrides: Any) -> ExportConfig:
    """
    Build the export configuration from the environment plus explicit overrides.

    Only keys present in overrides replace environment values, so passing
    target_dimensions=None disables the dimension filter.

    Raises:
        ConfigurationError: If a required value is missing or a value is invalid
    """
    env_config = env_config or EnvConfig()

    values: dict[str, Any] = {
        'token': env_config.FIGMA_TOKEN,
        'file_key': env_config.FIGMA_FILE_ID,
        'output_dir': Path(env_config.SCREENEXPORT_OUTPUT_DIR).expanduser(),
        'image_formats': parse_image_formats(env_config.SCREENEXPORT_IMAGE_FORMATS),
        'include_dimensions': env_config.SCREENEXPORT_INCLUDE_DIMENSIONS,
        'api_delay': env_config.SCREENEXPORT_API_DELAY_MS / 1000,
        'api_url': env_config.FIGMA_API_URL,
    }
    if 'target_dimensions' not in overrides:
        values['target_dimensions'] = _target_dimensions_from_env(env_config)
    values.update(overrides)

    if not values.get('token'):
        raise ConfigurationError('FIGMA_TOKEN is not set. Add it to your environment or .env file.')
    if not values.get('file_key'):
        raise ConfigurationError('FIGMA_FILE_ID is not set. Pass --file-key or add it to your environment.')

    try:
        config = ExportConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f'Invalid export configuration: {e}') from e

    logger.debug(f'Loaded export config: {config!r}')
    return config
