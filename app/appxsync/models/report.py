"""Sync result models."""

from dataclasses import dataclass, field
from pathlib import Path

from appxsync.core.manifest import ManifestChanges
from appxsync.core.source_list import SourceListChanges
from appxsync.models.project import TemplateKind


@dataclass
class SyncReport:
    """What a project sync did, step by step.

    Attributes:
        project_dir: Project that was synchronized.
        template: Template variant of the project.
        manifest: Manifest changes, or None when the template skips the manifest.
        images: Icon and splash screen files written.
        sources: Source-list changes.
        bom_files: Files that received a BOM.
        removed_vcs_dirs: Version-control folders deleted from www.
    """

    project_dir: Path
    template: TemplateKind
    manifest: ManifestChanges | None = None
    images: list[Path] = field(default_factory=list)
    sources: SourceListChanges | None = None
    bom_files: list[Path] = field(default_factory=list)
    removed_vcs_dirs: list[Path] = field(default_factory=list)
