"""Shared option handling for CLI commands.

Resolves the project, app root, app descriptor and settings from command
line options, turning every known error into a printed message and
exit code 1.
"""

from pathlib import Path
from typing import NoReturn

import typer

from appxsync.config_loader import AppConfigError, load_app_config
from appxsync.core.errors import SyncError
from appxsync.core.paths import find_app_config, find_app_root
from appxsync.core.settings import SettingsError, SyncSettings, load_settings
from appxsync.models.app_config import AppConfig
from appxsync.models.project import WindowsProject, discover_project
from appxsync.utils.formatting import print_error, print_info


def fail(error: Exception) -> NoReturn:
    """Print an error and exit with code 1."""
    print_error(str(error))
    raise typer.Exit(code=1) from error


def require_settings() -> SyncSettings:
    """Load user settings or exit with a helpful message."""
    try:
        return load_settings()
    except SettingsError as e:
        print_info("Fix or remove the settings file, or run 'appxsync settings --init --force'.")
        fail(e)


def require_project(project_dir: Path) -> WindowsProject:
    """Discover the Windows project or exit."""
    try:
        return discover_project(project_dir)
    except SyncError as e:
        fail(e)


def resolve_app_root(project: WindowsProject, app_root: Path | None, config_path: Path | None) -> Path:
    """Pick the app root: explicit option, the config's directory, or an ancestor."""
    if app_root is not None:
        return app_root
    if config_path is not None:
        return config_path.parent
    found = find_app_root(project.project_dir)
    if found is None:
        print_error(f"No app root with config.xml or app.toml above {project.project_dir}")
        print_info("Pass --config or --app-root explicitly.")
        raise typer.Exit(code=1)
    return found


def require_app_config(app_root: Path, config_path: Path | None) -> AppConfig:
    """Load the app descriptor or exit."""
    path = config_path or find_app_config(app_root)
    if path is None:
        print_error(f"No config.xml or app.toml in {app_root}")
        raise typer.Exit(code=1)
    try:
        return load_app_config(path)
    except AppConfigError as e:
        fail(e)
