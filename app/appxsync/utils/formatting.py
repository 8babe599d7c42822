"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from appxsync.core.theme import get_theme

if TYPE_CHECKING:
    from appxsync.models.report import SyncReport


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_report_table(report: SyncReport) -> Table:
    """Build a summary table for a finished sync.

    Args:
        report: Result of the sync pipeline.

    Returns:
        Rich Table with one row per pipeline step.
    """
    table = Table(
        title=f"Sync: {report.project_dir}",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Step", no_wrap=True)
    table.add_column("Result", style="text")

    if report.manifest is None:
        table.add_row("Manifest", "[muted]skipped (modern template)[/]")
    elif report.manifest.changed:
        table.add_row("Manifest", f"[changed]updated[/] {', '.join(report.manifest.updated) or 'capabilities'}")
    else:
        table.add_row("Manifest", "[muted]unchanged[/]")

    table.add_row("Images", f"[info]{len(report.images)}[/] copied")

    if report.sources is not None:
        table.add_row(
            "Source list",
            f"[removed]-{report.sources.removed}[/] [added]+{report.sources.added}[/]",
        )

    table.add_row("BOM", f"[info]{len(report.bom_files)}[/] files")
    table.add_row("VCS folders", f"[info]{len(report.removed_vcs_dirs)}[/] removed")
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
