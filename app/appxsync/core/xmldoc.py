"""XML document I/O shared by the manifest and project-file reconcilers.

ElementTree drops namespace prefixes on parse, so the prefix map is
captured separately and re-registered before serialization. That keeps
`xmlns="..."` and `xmlns:m2="..."` declarations intact instead of the
generated `ns0:` prefixes.
"""

import logging
import os
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from tempfile import NamedTemporaryFile

logger = logging.getLogger(__name__)

# Indentation used for human-diffable output
DEFAULT_INDENT_WIDTH = 4


class XmlDocumentError(Exception):
    """Raised when an XML document cannot be read, parsed or written."""


def local_name(tag: object) -> str | None:
    """Return the local part of an element tag, or None for comments and PIs."""
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def namespace_of(tag: str) -> str | None:
    """Return the namespace URI of a Clark-notation tag."""
    if tag.startswith("{"):
        return tag[1:].split("}", 1)[0]
    return None


@dataclass
class XmlDocument:
    """A parsed XML document with the namespace prefixes it declared.

    Attributes:
        path: File the document was loaded from.
        tree: Parsed element tree (comments preserved).
        namespaces: Mapping of prefix to URI; "" is the default namespace.
    """

    path: Path
    tree: ET.ElementTree
    namespaces: dict[str, str] = field(default_factory=dict)

    @property
    def root(self) -> ET.Element:
        return self.tree.getroot()

    @property
    def default_namespace(self) -> str | None:
        return self.namespaces.get("")

    def tag(self, name: str) -> str:
        """Build the tag for an element name in the default namespace."""
        if self.default_namespace:
            return f"{{{self.default_namespace}}}{name}"
        return name

    def iter_named(self, name: str, within: ET.Element | None = None) -> Iterator[ET.Element]:
        """Iterate elements that are unqualified or in the default namespace."""
        start = self.root if within is None else within
        for element in start.iter():
            if local_name(element.tag) != name:
                continue
            uri = namespace_of(element.tag)
            if uri is None or uri == self.default_namespace:
                yield element

    def find(self, name: str, within: ET.Element | None = None) -> ET.Element | None:
        """Find the first element named `name` in document order."""
        return next(self.iter_named(name, within), None)

    def find_namespaced(self, name: str, within: ET.Element | None = None) -> ET.Element | None:
        """Find the first element whose local name is `name` in any namespace."""
        start = self.root if within is None else within
        for element in start.iter():
            if local_name(element.tag) == name:
                return element
        return None

    def qualified_name(self, tag: str) -> str:
        """Render a tag the way it is written in the source document.

        Elements in the default namespace render as their bare local name,
        elements in a prefixed namespace as ``prefix:Local``.
        """
        uri = namespace_of(tag)
        local = local_name(tag) or tag
        if uri is None or uri == self.default_namespace:
            return local
        for prefix, declared in self.namespaces.items():
            if declared == uri and prefix:
                return f"{prefix}:{local}"
        return local


def parse_document(path: Path) -> XmlDocument:
    """Parse an XML file, preserving comments and namespace prefixes.

    Args:
        path: File to parse.

    Returns:
        Parsed XmlDocument.

    Raises:
        XmlDocumentError: If the file is missing, unreadable or not well-formed.
    """
    if not path.is_file():
        raise XmlDocumentError(f"File not found: {path}")

    try:
        namespaces: dict[str, str] = {}
        for _event, (prefix, uri) in ET.iterparse(path, events=("start-ns",)):
            namespaces.setdefault(prefix, uri)

        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        tree = ET.parse(path, parser=parser)
    except ET.ParseError as e:
        raise XmlDocumentError(f"Invalid XML in {path}: {e}") from e
    except OSError as e:
        raise XmlDocumentError(f"Failed to read {path}: {e}") from e

    logger.debug("Parsed %s (namespaces: %s)", path, namespaces)
    return XmlDocument(path=path, tree=tree, namespaces=namespaces)


def serialize_document(document: XmlDocument, indent_width: int = DEFAULT_INDENT_WIDTH) -> bytes:
    """Serialize a document with a fixed indentation and XML declaration."""
    for prefix, uri in document.namespaces.items():
        try:
            ET.register_namespace(prefix, uri)
        except ValueError:
            # ns0-style prefixes are reserved; ElementTree regenerates them
            logger.debug("Skipping reserved namespace prefix %r", prefix)

    ET.indent(document.tree, space=" " * indent_width)
    return ET.tostring(document.root, encoding="utf-8", xml_declaration=True) + b"\n"


def write_document(document: XmlDocument, indent_width: int = DEFAULT_INDENT_WIDTH) -> Path:
    """Write a document back to its path, replacing the file atomically.

    The content is written to a temporary file in the same directory and
    moved into place with os.replace(). The temporary file is cleaned up
    on failure.

    Raises:
        XmlDocumentError: If the file cannot be written.
    """
    data = serialize_document(document, indent_width)
    target = document.path

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=target.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(data)
        os.replace(str(tmp_path), str(target))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise XmlDocumentError(f"Failed to write {target}: {e}") from e

    logger.debug("Wrote %s (%d bytes)", target, len(data))
    return target
