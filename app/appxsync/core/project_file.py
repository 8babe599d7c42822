"""MSBuild project file model (.jsproj / .projitems).

Bundled web assets are listed as Content items:

    <ItemGroup>
        <Content Include="www\\index.html" />
    </ItemGroup>

Include paths use backslash separators on disk; this module exposes them
with forward slashes.
"""

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path

from appxsync.core.errors import InvalidProjectFileError
from appxsync.core.xmldoc import (
    DEFAULT_INDENT_WIDTH,
    XmlDocument,
    XmlDocumentError,
    local_name,
    parse_document,
    write_document,
)

logger = logging.getLogger(__name__)

ITEM_GROUP = "ItemGroup"
CONTENT_ITEM = "Content"


def to_msbuild_path(path: str) -> str:
    return path.replace("/", "\\")


def from_msbuild_path(path: str) -> str:
    return path.replace("\\", "/")


class ProjectFile:
    """A parsed MSBuild project file.

    Args:
        document: Parsed XML document whose root is a Project element.
    """

    def __init__(self, document: XmlDocument) -> None:
        if local_name(document.root.tag) != "Project":
            msg = f"Not an MSBuild project file: {document.path}"
            raise InvalidProjectFileError(msg)
        self._document = document

    @classmethod
    def load(cls, path: Path) -> "ProjectFile":
        """Load a project file from disk.

        Raises:
            InvalidProjectFileError: If the file is missing, not well-formed
                or not an MSBuild project.
        """
        try:
            document = parse_document(path)
        except XmlDocumentError as e:
            raise InvalidProjectFileError(str(e)) from e
        return cls(document)

    @property
    def path(self) -> Path:
        return self._document.path

    def _item_groups(self) -> list[ET.Element]:
        tag = self._document.tag(ITEM_GROUP)
        return [child for child in self._document.root if child.tag == tag]

    def _content_items(self, group: ET.Element) -> list[ET.Element]:
        tag = self._document.tag(CONTENT_ITEM)
        return [child for child in group if child.tag == tag]

    def source_files(self) -> list[str]:
        """Return every Content include path, in document order."""
        return [
            from_msbuild_path(item.get("Include", ""))
            for group in self._item_groups()
            for item in self._content_items(group)
            if item.get("Include")
        ]

    def remove_source_files(self, pattern: re.Pattern[str]) -> int:
        """Remove Content items whose Include matches `pattern`.

        Item groups left without children are removed as well.

        Returns:
            Number of removed items.
        """
        removed = 0
        root = self._document.root
        for group in self._item_groups():
            matching = [
                item
                for item in self._content_items(group)
                if item.get("Include") and pattern.search(item.get("Include", ""))
            ]
            if not matching:
                continue
            for item in matching:
                group.remove(item)
            removed += len(matching)
            if len(group) == 0:
                root.remove(group)
        return removed

    def add_source_files(self, paths: Iterable[str]) -> int:
        """Append a new item group holding one Content item per path.

        Returns:
            Number of added items.
        """
        group = ET.Element(self._document.tag(ITEM_GROUP))
        for path in paths:
            ET.SubElement(group, self._document.tag(CONTENT_ITEM), {"Include": to_msbuild_path(path)})
        if len(group) == 0:
            return 0
        self._document.root.append(group)
        return len(group)

    def write(self, indent_width: int = DEFAULT_INDENT_WIDTH) -> Path:
        """Persist the project file (whole-file replace).

        Raises:
            InvalidProjectFileError: If the file cannot be written.
        """
        try:
            return write_document(self._document, indent_width)
        except XmlDocumentError as e:
            raise InvalidProjectFileError(str(e)) from e
