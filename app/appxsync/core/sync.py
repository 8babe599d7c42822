"""Project synchronization pipeline.

Runs, for one project:

1. config type check
2. manifest reconciliation and image copy (legacy template only)
3. the pre_package lifecycle hook
4. source-list reconciliation against www
5. BOM insertion and version-control folder cleanup

Errors from steps 1-2 surface before the hook runs; a hook failure stops
the pipeline before the project file is touched.
"""

import logging
from pathlib import Path

from appxsync.core.assets import add_bom, delete_vcs_folders, update_images
from appxsync.core.errors import ConfigTypeError
from appxsync.core.hooks import PRE_PACKAGE, HookPayload, HookRunner
from appxsync.core.manifest import ManifestChanges, reconcile_manifest
from appxsync.core.settings import SyncSettings
from appxsync.core.source_list import SourceListChanges, reconcile_source_list
from appxsync.models.app_config import AppConfig
from appxsync.models.project import WWW_DIRNAME, WindowsProject
from appxsync.models.report import SyncReport

logger = logging.getLogger(__name__)


def require_app_config(config: object) -> AppConfig:
    """Reject anything that is not an AppConfig.

    Raises:
        ConfigTypeError: If `config` has the wrong type.
    """
    if not isinstance(config, AppConfig):
        msg = f"Project sync requires an AppConfig, got {type(config).__name__}"
        raise ConfigTypeError(msg)
    return config


def update_from_config(
    project: WindowsProject,
    config: AppConfig,
    app_root: Path,
    settings: SyncSettings,
) -> tuple[ManifestChanges | None, list[Path]]:
    """Apply the app descriptor to the manifest and images.

    Modern template projects need neither; they return (None, []).
    """
    require_app_config(config)

    if not project.needs_manifest or project.manifest_path is None:
        logger.debug("Modern template, skipping manifest for %s", project.project_dir)
        return None, []

    changes = reconcile_manifest(project.manifest_path, config, indent_width=settings.indent_width)
    images = update_images(project, config, app_root, settings.platform)
    return changes, images


def update_source_list(project: WindowsProject, settings: SyncSettings) -> SourceListChanges:
    """List every file of the project's www directory in the project file."""
    return reconcile_source_list(
        project.project_file,
        WWW_DIRNAME,
        project.www_dir,
        skip_dirs=frozenset(settings.vcs_dirs),
        indent_width=settings.indent_width,
    )


def sync_project(
    project: WindowsProject,
    config: object,
    *,
    app_root: Path,
    hooks: HookRunner,
    settings: SyncSettings | None = None,
) -> SyncReport:
    """Synchronize a Windows project with the app descriptor.

    Args:
        project: Discovered project handle.
        config: App descriptor; must be an AppConfig.
        app_root: Directory the descriptor's resource paths are relative to.
        hooks: Runner used to fire the pre_package event.
        settings: Pipeline settings. Defaults apply if None.

    Returns:
        SyncReport describing every step.

    Raises:
        ConfigTypeError: If `config` is not an AppConfig.
        MalformedManifestError: If the manifest cannot be parsed.
        InvalidManifestStructureError: If the manifest lacks a required node.
        AssetError: If an image cannot be copied.
        HookFailureError: If a pre_package hook fails.
        InvalidProjectFileError: If the project file cannot be parsed.
    """
    settings = settings or SyncSettings()
    app_config = require_app_config(config)

    report = SyncReport(project_dir=project.project_dir, template=project.template)
    report.manifest, report.images = update_from_config(project, app_config, app_root, settings)

    www = project.www_dir
    # Hooks run with the app root as cwd
    hooks.fire(PRE_PACKAGE, HookPayload(www_path=www.resolve(), platforms=(settings.platform,)))

    report.sources = update_source_list(project, settings)
    report.bom_files = add_bom(www, settings.bom_extensions)
    report.removed_vcs_dirs = delete_vcs_folders(www, settings.vcs_dirs)

    logger.info("Synchronized %s", project.project_dir)
    return report
