"""Application manifest reconciliation.

Applies the app descriptor to package.appxmanifest with minimal in-place
updates: attributes and texts are only rewritten when their value differs.
Capability elements are put into canonical (lexicographic) order because
Store certification rejects some orderings.

The manifest is only written after every patch step has succeeded, so a
structural error never leaves a half-updated file behind.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from appxsync.core.errors import InvalidManifestStructureError, MalformedManifestError
from appxsync.core.version import normalize_version
from appxsync.core.xmldoc import (
    DEFAULT_INDENT_WIDTH,
    XmlDocument,
    XmlDocumentError,
    local_name,
    parse_document,
    write_document,
)
from appxsync.models.app_config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class ManifestChanges:
    """Outcome of a manifest reconciliation.

    Attributes:
        path: Manifest that was reconciled.
        updated: Human-readable names of the values that changed (e.g. "Identity@Name").
        capabilities_reordered: True if the capability order changed.
    """

    path: Path
    updated: list[str] = field(default_factory=list)
    capabilities_reordered: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.updated) or self.capabilities_reordered


def _set_attribute(element: ET.Element, name: str, value: str, label: str, changes: ManifestChanges) -> None:
    if element.get(name) != value:
        element.set(name, value)
        changes.updated.append(f"{label}@{name}")


def _set_text(element: ET.Element, value: str, label: str, changes: ManifestChanges) -> None:
    if element.text != value:
        element.text = value
        changes.updated.append(label)


def sort_capabilities(document: XmlDocument, container: ET.Element) -> bool:
    """Detach, stable-sort by tag name and re-append the capability elements.

    Comment nodes stay in front of the elements.

    Returns:
        True if the order of the capability elements changed.
    """
    capabilities = [child for child in container if local_name(child.tag) is not None]
    for child in capabilities:
        container.remove(child)

    ordered = sorted(capabilities, key=lambda el: document.qualified_name(el.tag))
    for child in ordered:
        container.append(child)

    return [id(el) for el in ordered] != [id(el) for el in capabilities]


def apply_config(document: XmlDocument, config: AppConfig) -> ManifestChanges:
    """Patch a parsed manifest in memory.

    Raises:
        InvalidManifestStructureError: If Application or VisualElements is missing.
    """
    changes = ManifestChanges(path=document.path)
    package_name = config.package_name
    version = normalize_version(config.version)

    identity = document.find("Identity")
    if identity is not None:
        _set_attribute(identity, "Name", package_name, "Identity", changes)
        _set_attribute(identity, "Version", version, "Identity", changes)

    application = document.find("Application")
    if application is None:
        raise InvalidManifestStructureError("Application", document.path)
    _set_attribute(application, "Id", package_name, "Application", changes)

    # Windows 8.1 manifests declare it as m2:VisualElements
    visual_elements = document.find("VisualElements", within=application)
    if visual_elements is None:
        visual_elements = document.find_namespaced("VisualElements", within=application)
    if visual_elements is None:
        raise InvalidManifestStructureError("VisualElements", document.path)
    _set_attribute(visual_elements, "DisplayName", config.name, "VisualElements", changes)

    properties = document.find("Properties")
    if properties is not None:
        display_name = document.find("DisplayName", within=properties)
        if display_name is not None:
            _set_text(display_name, config.name, "Properties/DisplayName", changes)
        publisher = document.find("PublisherDisplayName", within=properties)
        if publisher is not None:
            _set_text(publisher, config.author, "Properties/PublisherDisplayName", changes)

    capabilities = document.find("Capabilities")
    if capabilities is not None:
        changes.capabilities_reordered = sort_capabilities(document, capabilities)
    else:
        logger.debug("No Capabilities node in %s", document.path)

    return changes


def reconcile_manifest(
    manifest_path: Path,
    config: AppConfig,
    *,
    indent_width: int = DEFAULT_INDENT_WIDTH,
) -> ManifestChanges:
    """Reconcile package.appxmanifest with the app descriptor.

    Args:
        manifest_path: Path to the manifest file.
        config: App descriptor to apply.
        indent_width: Spaces per indentation level in the written file.

    Returns:
        ManifestChanges describing what was updated.

    Raises:
        MalformedManifestError: If the manifest cannot be read, parsed or written.
        InvalidManifestStructureError: If a required node is missing.
    """
    try:
        document = parse_document(manifest_path)
    except XmlDocumentError as e:
        raise MalformedManifestError(str(e)) from e

    changes = apply_config(document, config)

    try:
        write_document(document, indent_width)
    except XmlDocumentError as e:
        raise MalformedManifestError(str(e)) from e

    if changes.updated:
        logger.info("Updated %s: %s", manifest_path, ", ".join(changes.updated))
    if changes.capabilities_reordered:
        logger.info("Reordered capabilities in %s", manifest_path)
    return changes
