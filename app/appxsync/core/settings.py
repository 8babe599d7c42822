"""User settings for synchronization.

Settings are stored in ~/.config/appxsync/settings.toml. A missing file
means defaults; an invalid file is an error.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from appxsync.core.paths import get_settings_path

logger = logging.getLogger(__name__)


class SyncSettings(BaseModel):
    """Tunable behavior of the sync pipeline.

    Attributes:
        platform: Platform tag used for icons, merges and hook payloads.
        indent_width: Spaces per indentation level in written XML files.
        bom_extensions: File suffixes that receive a UTF-8 BOM.
        vcs_dirs: Version-control folder names removed from www and skipped in listings.
        hook_timeout_seconds: Per-script hook timeout (None = wait indefinitely).
    """

    model_config = ConfigDict(extra="forbid")

    platform: Annotated[str, Field(min_length=1, description="Platform tag")] = "windows8"
    indent_width: Annotated[int, Field(ge=0, le=8, description="XML indentation width")] = 4
    bom_extensions: Annotated[
        list[str],
        Field(description="Suffixes that get a UTF-8 BOM"),
    ] = [".js", ".html", ".css", ".json"]
    vcs_dirs: Annotated[
        list[str],
        Field(description="Version-control folder names"),
    ] = [".git", ".hg", ".svn"]
    hook_timeout_seconds: Annotated[
        int | None,
        Field(ge=1, description="Hook script timeout in seconds"),
    ] = None

    @field_validator("bom_extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        """Ensure every extension starts with a dot and is lowercase."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> SyncSettings:
    """Load settings from a TOML file, falling back to defaults.

    Args:
        path: Settings file. If None, uses the default settings path.

    Returns:
        Validated SyncSettings.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings at %s, using defaults", settings_path)
        return SyncSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return SyncSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: SyncSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    data = settings.model_dump(exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
