"""Project file source-list reconciliation.

Makes the Content entries under a content root exactly mirror the files on
disk. All previously generated entries are removed first (in any casing,
with or without the $(MSBuildThisFileDirectory) prefix), so repeated runs
converge on the same entry set.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from appxsync.core.content_tree import VCS_METADATA_DIRS, iter_content_tree
from appxsync.core.project_file import ProjectFile
from appxsync.core.xmldoc import DEFAULT_INDENT_WIDTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceListChanges:
    """Outcome of a source-list reconciliation.

    Attributes:
        path: Project file that was reconciled.
        removed: Number of stale entries removed.
        added: Number of entries inserted from the content tree.
    """

    path: Path
    removed: int
    added: int


def content_root_pattern(root_name: str) -> re.Pattern[str]:
    """Match Include paths that live under `root_name`.

    Tolerates the MSBuild `$(MSBuildThisFileDirectory)` prefix and either
    path separator.
    """
    return re.compile(
        r"^(\$\(MSBuildThisFileDirectory\))?" + re.escape(root_name) + r"[\\/]",
        re.IGNORECASE,
    )


def reconcile_source_list(
    project_file_path: Path,
    root_name: str,
    root_dir: Path,
    *,
    skip_dirs: frozenset[str] = VCS_METADATA_DIRS,
    indent_width: int = DEFAULT_INDENT_WIDTH,
) -> SourceListChanges:
    """Replace the project's content entries with the current content tree.

    Args:
        project_file_path: Path to the .jsproj or .projitems file.
        root_name: Name of the content root as it appears in entries (e.g. "www").
        root_dir: Directory on disk whose files are listed.
        skip_dirs: Directory names excluded from the listing.
        indent_width: Spaces per indentation level in the written file.

    Returns:
        SourceListChanges with removed/added counts.

    Raises:
        InvalidProjectFileError: If the project file cannot be parsed or written.
        AssetError: If the content tree cannot be listed.
    """
    project = ProjectFile.load(project_file_path)

    removed = project.remove_source_files(content_root_pattern(root_name))
    listing = list(iter_content_tree(root_name, root_dir, skip_dirs=skip_dirs))
    added = project.add_source_files(listing)

    project.write(indent_width)

    logger.info(
        "Reconciled %s: removed %d stale entries, added %d",
        project_file_path,
        removed,
        added,
    )
    return SourceListChanges(path=project_file_path, removed=removed, added=added)
