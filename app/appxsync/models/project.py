"""Windows project handle and template discovery.

A project directory holds either a universal `*.projitems` shared project
(modern template, no manifest work) or a `*.jsproj` project with a
`package.appxmanifest` next to it (legacy template).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from appxsync.core.errors import ProjectNotFoundError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.appxmanifest"
WWW_DIRNAME = "www"
PLATFORM_WWW_DIRNAME = "platform_www"


class TemplateKind(str, Enum):
    """Project template variant, decided once at discovery.

    Attributes:
        LEGACY: `*.jsproj` project that needs manifest reconciliation and icon copy.
        MODERN: `*.projitems` universal project; the manifest is managed by the build.
    """

    LEGACY = "legacy"
    MODERN = "modern"


@dataclass(frozen=True, slots=True)
class WindowsProject:
    """A discovered Windows platform project.

    Attributes:
        project_dir: Platform project root directory.
        project_file: Path of the `.jsproj` or `.projitems` file.
        template: Template variant of the project.
        manifest_path: Path to package.appxmanifest (legacy template only).
    """

    project_dir: Path
    project_file: Path
    template: TemplateKind
    manifest_path: Path | None = None

    @property
    def needs_manifest(self) -> bool:
        return self.template == TemplateKind.LEGACY

    @property
    def www_dir(self) -> Path:
        """Platform-specific web asset directory."""
        return self.project_dir / WWW_DIRNAME

    @property
    def platform_www_dir(self) -> Path:
        """Stock platform assets (cordova.js and friends)."""
        return self.project_dir / PLATFORM_WWW_DIRNAME


def _first_with_suffix(entries: list[Path], suffix: str) -> Path | None:
    for entry in entries:
        if entry.suffix.lower() == suffix and entry.is_file():
            return entry
    return None


def discover_project(project_dir: Path) -> WindowsProject:
    """Inspect a directory and build the project handle.

    Args:
        project_dir: Candidate Windows project directory.

    Returns:
        WindowsProject with the template variant resolved.

    Raises:
        ProjectNotFoundError: If the directory holds no project file.
    """
    try:
        entries = sorted(project_dir.iterdir())
    except OSError as e:
        msg = f'The provided path "{project_dir}" is not a Windows project: {e}'
        raise ProjectNotFoundError(msg) from e

    projitems = _first_with_suffix(entries, ".projitems")
    if projitems is not None:
        logger.debug("Found universal project %s", projitems)
        return WindowsProject(
            project_dir=project_dir,
            project_file=projitems,
            template=TemplateKind.MODERN,
        )

    jsproj = _first_with_suffix(entries, ".jsproj")
    if jsproj is not None:
        logger.debug("Found legacy project %s", jsproj)
        return WindowsProject(
            project_dir=project_dir,
            project_file=jsproj,
            template=TemplateKind.LEGACY,
            manifest_path=project_dir / MANIFEST_FILENAME,
        )

    msg = f'The provided path "{project_dir}" is not a Windows project: no project file found'
    raise ProjectNotFoundError(msg)
