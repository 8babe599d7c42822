"""Recursive listing of the web asset tree.

Produces the relative paths that the project file must list as bundled
content. The listing is recomputed on every call and never cached.
"""

import logging
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from appxsync.core.errors import AssetError

logger = logging.getLogger(__name__)

# Version-control metadata directories that are never bundled
VCS_METADATA_DIRS: frozenset[str] = frozenset({".svn", ".git", ".hg"})


def iter_content_tree(
    root_name: str,
    root_dir: Path,
    *,
    skip_dirs: frozenset[str] = VCS_METADATA_DIRS,
) -> Iterator[str]:
    """Yield `root_name/<relative path>` for every regular file under `root_dir`.

    Entries are visited in sorted name order so the listing is reproducible.
    Symlinks, sockets, FIFOs and other special files are omitted. Names that are
    not valid UTF-8 are skipped with a warning.

    Args:
        root_name: Top-level directory name every path starts with.
        root_dir: Directory whose contents are listed.
        skip_dirs: Directory names that are not descended into.

    Yields:
        POSIX-style relative paths.

    Raises:
        AssetError: If a directory cannot be listed.
    """
    if not root_dir.is_dir():
        logger.debug("Content root does not exist: %s", root_dir)
        return
    yield from _walk(PurePosixPath(root_name), root_dir, skip_dirs)


def _is_utf8_name(name: str) -> bool:
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _walk(prefix: PurePosixPath, directory: Path, skip_dirs: frozenset[str]) -> Iterator[str]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise AssetError(f"Failed to list {directory}: {e}") from e

    for entry in entries:
        if entry.is_symlink():
            continue
        # Surrogate-escaped names cannot be written to the project file
        if not _is_utf8_name(entry.name):
            logger.warning("Skipping %r in %s: name is not valid UTF-8", entry.name, directory)
            continue
        if entry.is_dir():
            if entry.name in skip_dirs:
                continue
            yield from _walk(prefix / entry.name, entry, skip_dirs)
        elif entry.is_file():
            yield str(prefix / entry.name)
        # anything else (socket, FIFO, device) is not content
