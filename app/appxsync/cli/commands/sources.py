"""Sources command implementation.

Rewrites the project file's www Content entries from the files on disk.
"""

from pathlib import Path
from typing import Annotated

import typer

from appxsync.cli.common import fail, require_project, require_settings
from appxsync.core.errors import SyncError
from appxsync.core.sync import update_source_list
from appxsync.utils.formatting import console, print_success

app = typer.Typer(
    help="List every www file in the project file.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def sources_command(
    ctx: typer.Context,
    project_dir: Annotated[
        Path,
        typer.Option("--project", "-p", help="Windows platform project directory.", file_okay=False),
    ] = Path("."),
) -> None:
    """Reconcile the project file's source list with the www directory."""
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings()
    project = require_project(project_dir)

    try:
        changes = update_source_list(project, settings)
    except SyncError as e:
        fail(e)

    console.print(f"  [removed]-{changes.removed}[/] stale  [added]+{changes.added}[/] current")
    print_success(f"Updated {changes.path}")
