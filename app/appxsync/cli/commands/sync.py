"""Sync command implementation.

Runs the full pipeline for one Windows project: manifest and images
(legacy template), pre_package hooks, source list, BOM and VCS cleanup.
"""

import logging
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
from appxsync.core.assets import refresh_www
from appxsync.core.errors import SyncError
from appxsync.core.hooks import HookRunner, NullHookRunner, ScriptHookRunner
from appxsync.core.sync import sync_project
from appxsync.utils.formatting import console, create_report_table, print_info, print_success

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Synchronize a Windows project with the app descriptor.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def sync_command(
    ctx: typer.Context,
    project_dir: Annotated[
        Path,
        typer.Option(
            "--project",
            "-p",
            help="Windows platform project directory.",
            file_okay=False,
        ),
    ] = Path("."),
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="App descriptor (config.xml or app.toml).",
            dir_okay=False,
        ),
    ] = None,
    app_root: Annotated[
        Path | None,
        typer.Option(
            "--app-root",
            help="App root that resource paths are relative to.",
            file_okay=False,
        ),
    ] = None,
    refresh: Annotated[
        bool,
        typer.Option(
            "--refresh-www",
            help="Rebuild www from the app sources, merges and platform_www first.",
        ),
    ] = False,
    skip_hooks: Annotated[
        bool,
        typer.Option(
            "--skip-hooks",
            help="Do not run pre_package hook scripts.",
        ),
    ] = False,
) -> None:
    """Synchronize manifest, images and project file list.

    Examples:
        appxsync sync -p platforms/windows
        appxsync sync -p platforms/windows --config config.xml --refresh-www
        appxsync sync --skip-hooks
    """
    if ctx.invoked_subcommand is not None:
        return

    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    settings = require_settings()
    project = require_project(project_dir)
    root = resolve_app_root(project, app_root, config)
    app_config = require_app_config(root, config)

    if not quiet:
        print_info(f"Syncing {project.project_file.name} ({project.template.value} template)")

    hooks: HookRunner = (
        NullHookRunner()
        if skip_hooks
        else ScriptHookRunner(root, timeout=settings.hook_timeout_seconds)
    )

    try:
        if refresh:
            refresh_www(project, root, settings.platform)
        report = sync_project(project, app_config, app_root=root, hooks=hooks, settings=settings)
    except SyncError as e:
        logger.debug("Sync failed", exc_info=True)
        fail(e)

    if not quiet:
        console.print(create_report_table(report))
    print_success(f"Synchronized {project.project_dir}")
