"""CLI module for screenexport."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

try:
    import click
    from rich.console import Console
    from rich.markup import escape
    from rich.panel import Panel
    from rich.table import Table
except ImportError:
    raise ImportError("Please install CLI dependencies: pip install click rich")

from screenexport import __version__
from screenexport.api.views import ImageFormat
from screenexport.config import ExportConfig, load_export_config, parse_dimensions
from screenexport.exceptions import ConfigurationError, DocumentFetchError
from screenexport.export.service import list_screens, run_export
from screenexport.logging_config import setup_logging

console = Console()
logger = logging.getLogger(__name__)

_FORMAT_CHOICES = [f.value for f in ImageFormat]


def _configure_logging(verbose: bool) -> None:
    setup_logging(log_level="debug" if verbose else None, force_setup=True)


def _build_overrides(
    file_key: Optional[str],
    output_dir: Optional[Path],
    image_formats: tuple[str, ...],
    include_dimensions: Optional[bool],
    size: Optional[str],
    all_sizes: bool,
    delay_ms: Optional[int],
) -> dict[str, Any]:
    """Turn the CLI options that were actually given into config overrides."""
    if size and all_sizes:
        raise click.UsageError("--size and --all-sizes are mutually exclusive")

    overrides: dict[str, Any] = {}
    if file_key:
        overrides["file_key"] = file_key
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if image_formats:
        overrides["image_formats"] = tuple(ImageFormat(f) for f in image_formats)
    if include_dimensions is not None:
        overrides["include_dimensions"] = include_dimensions
    if size:
        overrides["target_dimensions"] = parse_dimensions(size)
    if all_sizes:
        overrides["target_dimensions"] = None
    if delay_ms is not None:
        overrides["api_delay"] = delay_ms / 1000
    return overrides


def _load_config_or_exit(**overrides: Any) -> ExportConfig:
    try:
        return load_export_config(**overrides)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(1)


def _filter_label(config: ExportConfig) -> str:
    if config.target_dimensions:
        return f"{config.target_dimensions}px"
    return "all sizes"


@click.group()
@click.version_option(version=__version__, prog_name="screenexport")
def cli():
    """screenexport - export Figma screens as images."""
    pass


@cli.command()
@click.option("--file-key", "-f", default=None, help="Figma file key (defaults to FIGMA_FILE_ID)")
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to save exported screens",
)
@click.option(
    "--format",
    "-t",
    "image_formats",
    type=click.Choice(_FORMAT_CHOICES, case_sensitive=False),
    multiple=True,
    help="Image format, repeat in order of preference (default: png)",
)
@click.option(
    "--include-dimensions/--no-include-dimensions",
    default=None,
    help="Append WIDTHxHEIGHT to file names",
)
@click.option("--size", default=None, help="Only export frames of this exact size, e.g. 375x812")
@click.option("--all-sizes", is_flag=True, help="Export frames of every size")
@click.option("--delay-ms", type=click.IntRange(min=0), default=None, help="Delay between screens in milliseconds")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def export(
    file_key: Optional[str],
    output_dir: Optional[Path],
    image_formats: tuple[str, ...],
    include_dimensions: Optional[bool],
    size: Optional[str],
    all_sizes: bool,
    delay_ms: Optional[int],
    verbose: bool,
):
    """Export the screens of a Figma file.

    Fetches the file, selects its FRAME nodes (optionally only those of an
    exact size) and downloads a rendered image of each one. A screen that
    fails in every format is logged and skipped; only a failure to fetch the
    file itself ends the run with a non-zero exit code.

    Example:
        >>> screenexport export --file-key ABC123 --size 375x812 --format png --format jpg
    """
    _configure_logging(verbose)

    try:
        overrides = _build_overrides(
            file_key, output_dir, image_formats, include_dimensions, size, all_sizes, delay_ms
        )
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="--size")

    config = _load_config_or_exit(**overrides)

    console.print(Panel.fit(
        f"[bold blue]screenexport[/bold blue]\n"
        f"File: {config.file_key}\n"
        f"Formats: {', '.join(f.value for f in config.image_formats)}\n"
        f"Size filter: {_filter_label(config)}\n"
        f"Output: {config.output_dir}",
        title="Starting Export",
    ))

    try:
        report = asyncio.run(run_export(config))
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(1)
    except DocumentFetchError as e:
        console.print(f"[red]Error fetching Figma file: {escape(str(e))}[/red]")
        sys.exit(1)

    if report.screens_found == 0:
        console.print(Panel.fit(
            "[yellow]No screens matched.[/yellow]\n"
            f"Size filter: {_filter_label(config)}",
            title="Results",
        ))
        return

    console.print(Panel.fit(
        f"[green]Export completed![/green]\n\n"
        f"File: {escape(report.file_name or config.file_key)}\n"
        f"Screens: {report.screens_found}\n"
        f"Check the {report.output_dir} directory for your screen exports.",
        title="Results",
    ))


@cli.command(name="list")
@click.option("--file-key", "-f", default=None, help="Figma file key (defaults to FIGMA_FILE_ID)")
@click.option("--size", default=None, help="Only list frames of this exact size, e.g. 375x812")
@click.option("--all-sizes", is_flag=True, help="List frames of every size")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def list_command(file_key: Optional[str], size: Optional[str], all_sizes: bool, verbose: bool):
    """List the screens that would be exported, without downloading anything."""
    _configure_logging(verbose)

    try:
        overrides = _build_overrides(file_key, None, (), None, size, all_sizes, None)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="--size")

    config = _load_config_or_exit(**overrides)

    try:
        screens = asyncio.run(list_screens(config))
    except DocumentFetchError as e:
        console.print(f"[red]Error fetching Figma file: {escape(str(e))}[/red]")
        sys.exit(1)

    table = Table(title=f"Screens ({_filter_label(config)})")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Size")
    for screen in screens:
        size_label = screen.bounding_box.size_label if screen.bounding_box else "-"
        table.add_row(screen.id, escape(screen.name), size_label)

    console.print(table)
    console.print(f"Found {len(screens)} screen(s).")


@cli.command()
def init():
    """Check the screenexport configuration.

    Reports whether the Figma token and file key are available in the
    environment (or a .env file in the current directory).
    """
    from dotenv import find_dotenv, load_dotenv

    load_dotenv(find_dotenv(usecwd=True))
    console.print("[blue]Checking screenexport configuration...[/blue]")

    status = []
    for env_var, label in [("FIGMA_TOKEN", "Figma token"), ("FIGMA_FILE_ID", "Figma file key")]:
        if os.environ.get(env_var):
            status.append(f"[green]{label}: Configured[/green]")
        else:
            status.append(f"[yellow]{label}: Not configured ({env_var})[/yellow]")

    console.print(Panel.fit("\n".join(status), title="Figma"))


def main():
    """Main entry point for the screenexport CLI."""
    cli()


if __name__ == "__main__":
    main()
