"""XDG-compliant path management for appxsync.

This module provides standardized paths following the XDG Base Directory
Specification for user configuration.

XDG defaults:
- Config: ~/.config/appxsync/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "appxsync"

# App descriptor file names, in lookup order
APP_CONFIG_FILENAMES: tuple[str, ...] = ("config.xml", "app.toml")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/appxsync/ (or XDG_CONFIG_HOME/appxsync/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/appxsync/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/appxsync/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def find_app_config(app_root: Path) -> Path | None:
    """Locate the app descriptor inside an app root.

    Args:
        app_root: Directory holding the app sources.

    Returns:
        Path to config.xml or app.toml, or None if neither exists.
    """
    for name in APP_CONFIG_FILENAMES:
        candidate = app_root / name
        if candidate.is_file():
            return candidate
    return None


def find_app_root(start: Path) -> Path | None:
    """Walk up from `start` to the first directory holding an app descriptor.

    Platform projects usually live at `<app_root>/platforms/windows`.

    Returns:
        The app root, or None if no ancestor holds a descriptor.
    """
    current = start.resolve()
    for candidate in (current, *current.parents):
        if find_app_config(candidate) is not None:
            return candidate
    return None
