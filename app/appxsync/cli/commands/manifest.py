"""Manifest command implementation.

Reconciles package.appxmanifest only, without hooks or file lists.
"""

from pathlib import Path
from typing import Annotated

import typer

from appxsync.cli.common import (
    fail,
    require_app_config,
    require_project,
    require_settings,
    resolve_app_root,
)
from appxsync.core.errors import SyncError
from appxsync.core.manifest import reconcile_manifest
from appxsync.utils.formatting import console, print_info, print_success, print_warning

app = typer.Typer(
    help="Update package.appxmanifest from the app descriptor.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def manifest_command(
    ctx: typer.Context,
    project_dir: Annotated[
        Path,
        typer.Option("--project", "-p", help="Windows platform project directory.", file_okay=False),
    ] = Path("."),
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="App descriptor (config.xml or app.toml).", dir_okay=False),
    ] = None,
) -> None:
    """Reconcile identity, display names and capability order.

    Only legacy (.jsproj) projects carry a manifest that needs updating.
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = require_settings()
    project = require_project(project_dir)
    if not project.needs_manifest or project.manifest_path is None:
        print_warning(f"{project.project_file.name} uses the modern template; nothing to update.")
        return

    root = resolve_app_root(project, None, config)
    app_config = require_app_config(root, config)

    try:
        changes = reconcile_manifest(project.manifest_path, app_config, indent_width=settings.indent_width)
    except SyncError as e:
        fail(e)

    for item in changes.updated:
        console.print(f"  [changed]~[/] {item}")
    if changes.capabilities_reordered:
        console.print("  [changed]~[/] Capabilities order")
    if changes.changed:
        print_success(f"Updated {project.manifest_path}")
    else:
        print_info(f"{project.manifest_path} is up to date")
