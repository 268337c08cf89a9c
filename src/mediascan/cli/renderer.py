"""Renderer for CLI output.

This module renders an aggregated scan as human-readable Rich output:
- a header with the scan parameters and totals,
- per-category counts (shown when the filter is All or selects the category),
- an optional per-file listing, compact or detailed, sorted by (category, name),
- the per-extension breakdown table.

Rendering is a pure function of the ScanResult and ScanSummary; nothing is
re-scanned or mutated.
"""

from enum import Enum

from rich.console import Console
from rich.table import Table
from rich.text import Text

from mediascan.core.aggregator import format_name, format_size, format_timestamp
from mediascan.models.core import Category, FileRecord, ScanResult
from mediascan.models.summary import ScanSummary


class ListingStyle(str, Enum):
    """How the per-file listing is rendered."""

    NONE = "none"
    COMPACT = "compact"
    DETAILED = "detailed"


CATEGORY_STYLES = {
    Category.AUDIO: "cyan",
    Category.VIDEO: "magenta",
    Category.PICTURE: "green",
    Category.VAULT: "yellow",
    Category.UNCLASSIFIED: "red",
}


def _category_of(record: FileRecord) -> Category:
    return record.category or Category.UNCLASSIFIED


def render_header(result: ScanResult, summary: ScanSummary, console: Console) -> None:
    """Print scan parameters, totals and per-category counts."""
    console.print(Text.assemble(("Media scan: ", "bold"), format_name(result.root)))
    console.print(
        f"Media type: {result.media_filter.value} | "
        f"Recursive: {'yes' if result.recursive else 'no'}"
    )
    console.print(f"Total files: [bold]{summary.total_count}[/bold]")

    for category in Category.real():
        if result.media_filter.includes(category):
            console.print(
                f"  {category.value}: {summary.count_for(category)}",
                style=CATEGORY_STYLES[category],
            )
    unclassified = summary.count_for(Category.UNCLASSIFIED)
    if unclassified:
        console.print(
            f"  {Category.UNCLASSIFIED.value}: {unclassified}",
            style=CATEGORY_STYLES[Category.UNCLASSIFIED],
        )

    console.print(f"Total size: [bold]{format_size(summary.total_size)}[/bold]")
    console.print(f"Scan time: {result.duration_seconds:.2f} seconds")

    skipped = len(result.diagnostics)
    if skipped:
        noun = "entry" if skipped == 1 else "entries"
        console.print(f"[yellow]Skipped {skipped} inaccessible {noun}[/yellow]")


def render_listing(
    summary: ScanSummary, console: Console, style: ListingStyle = ListingStyle.COMPACT
) -> None:
    """Print every file, one line each (compact) or as a detail block."""
    if style is ListingStyle.NONE or not summary.sorted_files:
        return

    console.print()
    for record in summary.sorted_files:
        category = _category_of(record)
        if style is ListingStyle.COMPACT:
            console.print(
                Text.assemble(
                    (f"[{category.value}] ", CATEGORY_STYLES[category]),
                    format_name(record.name),
                    f" ({format_size(record.size)})",
                )
            )
            continue

        console.print(
            Text.assemble(
                (format_name(record.name), "bold"),
                " ",
                (f"({category.value})", CATEGORY_STYLES[category]),
            )
        )
        console.print(Text(f"  Path:     {format_name(record.path)}"))
        console.print(f"  Size:     {format_size(record.size)}")
        console.print(f"  Created:  {format_timestamp(record.created)}")
        console.print(f"  Modified: {format_timestamp(record.modified)}")


def render_extension_table(summary: ScanSummary, console: Console) -> None:
    """Print the per-extension breakdown as a Rich table."""
    table = Table(title="Files by extension")
    table.add_column("Extension", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Size", justify="right", style="green")

    for stat in summary.extension_stats:
        table.add_row(
            format_name(stat.extension) or "(none)", str(stat.count), format_size(stat.size)
        )

    console.print()
    console.print(table)


def render_summary(
    result: ScanResult,
    summary: ScanSummary,
    console: Console | None = None,
    *,
    listing: ListingStyle = ListingStyle.COMPACT,
) -> None:
    """Render the full text report for one scan.

    Args:
        result: The scan that was run.
        summary: Aggregate of ``result.files``.
        console: Optional Console instance to use for rendering.
        listing: Per-file listing style; NONE prints only the summary.
    """
    console = console or Console()

    render_header(result, summary, console)
    if summary.total_count == 0:
        console.print("[yellow]No media files found.[/yellow]")
        return

    render_listing(summary, console, listing)
    render_extension_table(summary, console)
