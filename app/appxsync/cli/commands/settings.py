"""Settings command implementation.

Shows the effective settings or writes a default settings file.
"""

from typing import Annotated

import typer
from rich.table import Table

from appxsync.cli.common import fail, require_settings
from appxsync.core.paths import get_settings_path
from appxsync.core.settings import SettingsError, SyncSettings, save_settings
from appxsync.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize appxsync settings.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def settings_command(
    ctx: typer.Context,
    init: Annotated[
        bool,
        typer.Option("--init", help="Write a settings file with default values."),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Show effective settings, or create the settings file with --init."""
    if ctx.invoked_subcommand is not None:
        return

    path = get_settings_path()

    if init:
        if path.exists() and not force:
            print_error(f"Settings already exist: {path}")
            print_info("Use --force to overwrite.")
            raise typer.Exit(code=1)
        try:
            saved = save_settings(SyncSettings(), path)
        except SettingsError as e:
            fail(e)
        print_success(f"Settings written: {saved}")
        return

    settings = require_settings()
    source = str(path) if path.exists() else "defaults"

    table = Table(title=f"Settings ({source})", header_style="bold_header", border_style="border")
    table.add_column("Key", no_wrap=True)
    table.add_column("Value", style="info")
    for key, value in settings.model_dump().items():
        table.add_row(key, ", ".join(value) if isinstance(value, list) else str(value))
    console.print(table)
