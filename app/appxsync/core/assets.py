"""Asset plumbing around the reconcilers.

Copies icons and splash screens into the project, prefixes text assets with
a UTF-8 byte-order mark (required by Store certification), removes
version-control folders from the web asset tree, and rebuilds the `www`
directory from the app sources.
"""

import codecs
import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from appxsync.core.content_tree import VCS_METADATA_DIRS
from appxsync.core.errors import AssetError
from appxsync.models.app_config import AppConfig, Resource
from appxsync.models.project import WWW_DIRNAME, WindowsProject

logger = logging.getLogger(__name__)

UTF8_BOM = codecs.BOM_UTF8

# Text assets that need a BOM
DEFAULT_BOM_EXTENSIONS: tuple[str, ...] = (".js", ".html", ".css", ".json")

DEFAULT_VCS_DIRS: tuple[str, ...] = tuple(sorted(VCS_METADATA_DIRS))

MERGES_DIRNAME = "merges"


@dataclass(frozen=True, slots=True)
class ImageSlot:
    """A fixed image location in the project and the size it expects."""

    dest: str
    width: int
    height: int


PLATFORM_ICONS: tuple[ImageSlot, ...] = (
    ImageSlot("images/logo.png", 150, 150),
    ImageSlot("images/smalllogo.png", 30, 30),
    ImageSlot("images/storelogo.png", 50, 50),
)

SPLASH_SCREEN = ImageSlot("images/splashscreen.png", 620, 300)


def copy_resource(app_root: Path, resource: Resource, dest: Path) -> Path:
    """Copy an image byte-for-byte, overwriting the destination.

    Raises:
        AssetError: If the source is missing or the copy fails.
    """
    src = app_root / resource.src
    logger.debug("Copying image from %s to %s", src, dest)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)
    except OSError as e:
        raise AssetError(f"Failed to copy {src} to {dest}: {e}") from e
    return dest


def update_images(project: WindowsProject, config: AppConfig, app_root: Path, platform: str) -> list[Path]:
    """Copy the best matching icons and the splash screen into the project.

    Icons fall back to the default (unsized) icon; the splash screen is only
    copied on an exact size match.

    Returns:
        Destination paths that were written.
    """
    written: list[Path] = []

    icons = config.get_icons(platform)
    for slot in PLATFORM_ICONS:
        icon = icons.get_by_size(slot.width, slot.height) or icons.get_default()
        if icon is not None:
            written.append(copy_resource(app_root, icon, project.project_dir / slot.dest))

    splash = config.get_splash_screens(platform).get_by_size(SPLASH_SCREEN.width, SPLASH_SCREEN.height)
    if splash is not None:
        written.append(copy_resource(app_root, splash, project.project_dir / SPLASH_SCREEN.dest))

    return written


def has_bom(path: Path) -> bool:
    with open(path, "rb") as f:
        return f.read(len(UTF8_BOM)) == UTF8_BOM


def add_bom(root: Path, extensions: Iterable[str] = DEFAULT_BOM_EXTENSIONS) -> list[Path]:
    """Prefix every matching text file under `root` with a UTF-8 BOM.

    Files that already start with the full BOM are left alone.

    Returns:
        Files that were rewritten.

    Raises:
        AssetError: If a file cannot be read or rewritten.
    """
    suffixes = {ext.lower() for ext in extensions}
    rewritten: list[Path] = []
    if not root.is_dir():
        return rewritten

    try:
        for path in sorted(root.rglob("*")):
            if path.is_symlink() or not path.is_file() or path.suffix.lower() not in suffixes:
                continue
            if has_bom(path):
                continue
            path.write_bytes(UTF8_BOM + path.read_bytes())
            rewritten.append(path)
    except OSError as e:
        raise AssetError(f"Failed to add BOM under {root}: {e}") from e

    if rewritten:
        logger.info("Added BOM to %d files under %s", len(rewritten), root)
    return rewritten


def delete_vcs_folders(root: Path, names: Iterable[str] = DEFAULT_VCS_DIRS) -> list[Path]:
    """Remove version-control metadata directories anywhere below `root`.

    Returns:
        Directories that were removed.

    Raises:
        AssetError: If the tree cannot be walked or a folder cannot be removed.
    """
    wanted = set(names)
    removed: list[Path] = []
    if not root.is_dir():
        return removed

    try:
        # Collect first, then delete: rglob must not walk into removed trees
        candidates = [p for p in sorted(root.rglob("*")) if p.name in wanted and p.is_dir() and not p.is_symlink()]
        for path in candidates:
            if any(parent in removed for parent in path.parents):
                continue
            shutil.rmtree(path)
            removed.append(path)
            logger.debug("Removed %s", path)
    except OSError as e:
        raise AssetError(f"Failed to remove version-control folders under {root}: {e}") from e
    return removed


def _copy_tree_contents(src: Path, dest: Path) -> None:
    if not src.is_dir():
        logger.debug("Skipping missing directory %s", src)
        return
    shutil.copytree(src, dest, dirs_exist_ok=True)


def refresh_www(project: WindowsProject, app_root: Path, platform: str) -> Path:
    """Rebuild the project's www directory from the app sources.

    Order: app `www/`, then `merges/<platform>/` overrides, then the
    project's stock `platform_www/` assets.

    Raises:
        AssetError: If the directory cannot be rebuilt.
    """
    www = project.www_dir
    try:
        if www.exists():
            shutil.rmtree(www)
        www.mkdir(parents=True)
        _copy_tree_contents(app_root / WWW_DIRNAME, www)
        _copy_tree_contents(app_root / MERGES_DIRNAME / platform, www)
        _copy_tree_contents(project.platform_www_dir, www)
    except OSError as e:
        raise AssetError(f"Failed to refresh {www}: {e}") from e

    logger.info("Refreshed %s from %s", www, app_root)
    return www
