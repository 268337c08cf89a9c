"""CLI commands for mediascan.

This module implements the user-facing CLI: ``scan``, ``config`` and
``version``.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through a Rich Console for consistent, styled UX.
- Scan options left unset on the command line are resolved from environment
  variables and the config file (see :mod:`mediascan.utils.config`).

Exit codes:
- 0: success, including runs where an export could not be written.
- 1: the scan root does not exist or the configuration is invalid.
- 2: invalid command-line usage (reported by Typer).
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Optional

import tomli
import typer
from rich.markup import escape

from mediascan.cli.console import ENV_DISABLE_RICH, ConsoleManager
from mediascan.cli.renderer import ListingStyle, render_summary
from mediascan.core.aggregator import aggregate, format_name
from mediascan.core.errors import ExportWriteError, PathNotFoundError
from mediascan.core.registry import CategoryRegistry, default_registry
from mediascan.core.scanner import ensure_root, scan_directory
from mediascan.fs import export
from mediascan.models.core import MediaFilter
from mediascan.models.scan import ScanOptions
from mediascan.utils.config import (
    get_setting,
    load_category_overrides,
    resolve_setting,
    set_setting,
    to_bool,
)
from mediascan.utils.debug import debug, setup_logger

app = typer.Typer(
    name="mediascan",
    help="Scan a directory tree, classify media files by extension and report them.",
    add_completion=True,
)


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


def validate_media_type(value: str) -> MediaFilter:
    """Convert a media type name to a MediaFilter, ignoring case.

    Raises:
        typer.BadParameter: If the value is not a valid media type.
    """
    for media_filter in MediaFilter:
        if media_filter.value.lower() == value.strip().lower():
            return media_filter
    valid_types = ", ".join(m.value for m in MediaFilter)
    raise typer.BadParameter(f"Invalid media type {value!r}. Must be one of: {valid_types}")


def parse_bool(value: str) -> bool:
    """Parse a ``true``/``false`` style option value.

    Raises:
        typer.BadParameter: If the value is not a recognised boolean.
    """
    try:
        return to_bool(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


PATH = Annotated[
    Optional[Path],
    typer.Option(
        "--path",
        "-p",
        help="Directory to scan (default: current working directory)",
        show_default=False,
    ),
]

MEDIA_TYPE = Annotated[
    Optional[MediaFilter],
    typer.Option(
        "--media-type",
        "-t",
        case_sensitive=False,
        help="Media type to scan for (default: All)",
        show_default=False,
    ),
]

RECURSIVE = Annotated[
    Optional[str],
    typer.Option(
        "--recursive",
        "-r",
        metavar="BOOL",
        help="Scan subdirectories: true or false (default: true)",
        show_default=False,
    ),
]

INCLUDE_HIDDEN = Annotated[
    bool,
    typer.Option(
        "--include-hidden",
        help="Include hidden (dot-prefixed) files and directories",
    ),
]

EXPORT_CSV = Annotated[
    Optional[Path],
    typer.Option(
        "--export-csv",
        dir_okay=False,
        help="Write the classified files to this CSV file",
    ),
]

EXPORT_JSON = Annotated[
    Optional[Path],
    typer.Option(
        "--export-json",
        dir_okay=False,
        help="Write the classified files to this JSON file",
    ),
]

SHOW_DETAILS = Annotated[
    bool,
    typer.Option(
        "--show-details",
        help="List every file with path, size and timestamps",
    ),
]

LIST_FILES = Annotated[
    bool,
    typer.Option(
        "--list/--no-list",
        help="List every file on one line after the summary",
    ),
]


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output and spinners. "
            f"Can also be set with the {ENV_DISABLE_RICH} environment variable."
        ),
    ),
) -> None:
    """Scan a directory tree, classify media files by extension and report them."""
    setup_logger()
    if no_rich:
        import os

        os.environ[ENV_DISABLE_RICH] = "1"


def resolve_scan_options(  # noqa: PLR0913
    path: Optional[Path] = None,
    media_type: Optional[MediaFilter] = None,
    recursive: Optional[bool] = None,
    include_hidden: bool = False,
    export_csv: Optional[Path] = None,
    export_json: Optional[Path] = None,
    show_details: bool = False,
    list_files: bool = True,
) -> ScanOptions:
    """Merge CLI values with env vars and the config file.

    Raises:
        typer.BadParameter: If a configured media type is invalid.
        ValueError: If a configured boolean is not a recognised word.
    """
    media_name = resolve_setting(
        "scan.media_type",
        default=MediaFilter.ALL.value,
        cli_value=media_type.value if media_type is not None else None,
    )
    return ScanOptions(
        root=path if path is not None else Path.cwd(),
        media_filter=validate_media_type(media_name),
        recursive=resolve_setting("scan.recursive", default=True, cli_value=recursive),
        include_hidden=resolve_setting(
            "scan.include_hidden", default=False, cli_value=include_hidden or None
        ),
        list_files=list_files,
        show_details=show_details,
        export_csv=export_csv,
        export_json=export_json,
    )


def build_registry() -> CategoryRegistry:
    """Return the built-in registry extended by the ``[categories]`` config."""
    overrides = load_category_overrides()
    registry = default_registry()
    return registry.with_overrides(overrides) if overrides else registry


def listing_style(options: ScanOptions) -> ListingStyle:
    """Pick the per-file listing style for *options*."""
    if options.show_details:
        return ListingStyle.DETAILED
    if options.list_files:
        return ListingStyle.COMPACT
    return ListingStyle.NONE


@app.command()
def scan(  # noqa: PLR0913
    path: PATH = None,
    media_type: MEDIA_TYPE = None,
    recursive: RECURSIVE = None,
    include_hidden: INCLUDE_HIDDEN = False,
    export_csv: EXPORT_CSV = None,
    export_json: EXPORT_JSON = None,
    show_details: SHOW_DETAILS = False,
    list_files: LIST_FILES = True,
) -> None:
    """Scan a directory, classify media files and report the results."""
    # Raised outside the console context so Typer reports it as a usage error.
    recursive_flag = parse_bool(recursive) if recursive is not None else None

    with ConsoleManager() as console:
        try:
            options = resolve_scan_options(
                path,
                media_type,
                recursive_flag,
                include_hidden,
                export_csv,
                export_json,
                show_details,
                list_files,
            )
            registry = build_registry()
        except (typer.BadParameter, ValueError, tomli.TOMLDecodeError) as e:
            console.print(f"[red]Error: Invalid configuration: {escape(str(e))}[/red]")
            raise typer.Exit(ExitCode.ERROR)

        # Validate before any other output so a bad root prints only the error.
        try:
            root = ensure_root(options.root)
            with console.status("[cyan]Scanning directory...", spinner="dots"):
                result = scan_directory(
                    root,
                    options.media_filter,
                    registry=registry,
                    recursive=options.recursive,
                    include_hidden=options.include_hidden,
                )
        except PathNotFoundError as e:
            console.print(f"[red]Error: {escape(format_name(e))}[/red]")
            raise typer.Exit(ExitCode.ERROR)

        debug(f"Scan options: {options.model_dump()}")
        debug(f"Scan finished: {len(result.files)} files, {len(result.diagnostics)} skipped")

        summary = aggregate(result.files)
        render_summary(result, summary, console, listing=listing_style(options))

        exports = (
            ("CSV", export.export_csv, options.export_csv),
            ("JSON", export.export_json, options.export_json),
        )
        for label, exporter, destination in exports:
            if destination is None:
                continue
            try:
                written = exporter(result, destination)
            except ExportWriteError as e:
                console.print(f"[bold yellow]Warning:[/bold yellow] {escape(format_name(e))}")
                continue
            console.print(f"[green]Exported {label} to {escape(format_name(written))}[/green]")


def _parse_config_value(value: str) -> Any:
    """Interpret a config value typed on the command line."""
    lowered = value.strip().lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered.isdigit():
        return int(lowered)
    return value


@app.command("config")
def config_command(
    key: Annotated[str, typer.Argument(help="Dotted setting key, e.g. scan.media_type")],
    value: Annotated[
        Optional[str], typer.Argument(help="Value to store; omit to show the current one")
    ] = None,
) -> None:
    """Show or persist a setting in the config file."""
    with ConsoleManager() as console:
        try:
            if value is None:
                stored = get_setting(key)
                shown = "(not set)" if stored is None else escape(str(stored))
                console.print(f"{escape(key)} = {shown}")
                return
            set_setting(key, _parse_config_value(value))
        except (ValueError, tomli.TOMLDecodeError) as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(ExitCode.ERROR)
        console.print(f"[green]Saved {escape(key)} = {escape(value)}[/green]")


@app.command()
def version() -> None:
    """Show the version of mediascan."""
    from mediascan.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"MediaScan version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
