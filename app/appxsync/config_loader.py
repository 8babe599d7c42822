"""App descriptor loading.

Two formats are accepted:

- config.xml, the Cordova widget document::

    <widget id="com.example.app" version="1.2.3">
        <name>Example</name>
        <author>Example Corp</author>
        <icon src="res/icon.png" />
        <platform name="windows8">
            <icon src="res/windows/logo.png" width="150" height="150" />
            <splash src="res/windows/splash.png" width="620" height="300" />
        </platform>
    </widget>

- app.toml, validated directly against AppConfig.
"""

import logging
import tomllib
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from appxsync.core.xmldoc import XmlDocumentError, local_name, parse_document
from appxsync.models.app_config import AppConfig

logger = logging.getLogger(__name__)


class AppConfigError(Exception):
    """Base exception for app descriptor errors."""


class AppConfigNotFoundError(AppConfigError):
    """Raised when the app descriptor file does not exist."""


class AppConfigParseError(AppConfigError):
    """Raised when the app descriptor cannot be parsed."""


class AppConfigValidationError(AppConfigError):
    """Raised when the app descriptor content is invalid."""


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if local_name(child.tag) == name]


def _int_attr(element: ET.Element, name: str) -> int | None:
    value = element.get(name)
    if value is None or not value.strip():
        return None
    try:
        number = int(value)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r on <%s>", name, value, local_name(element.tag))
        return None
    if number <= 0:
        logger.warning("Ignoring non-positive %s=%r on <%s>", name, value, local_name(element.tag))
        return None
    return number


def _density(element: ET.Element) -> str | None:
    for key, value in element.attrib.items():
        if local_name(key) == "density":
            return value
    return None


def _resources(element: ET.Element, name: str, platform: str | None) -> list[dict[str, Any]]:
    resources = []
    for child in _children(element, name):
        src = child.get("src")
        if not src:
            logger.warning("Skipping <%s> without src", name)
            continue
        resources.append(
            {
                "src": src,
                "width": _int_attr(child, "width"),
                "height": _int_attr(child, "height"),
                "density": _density(child),
                "platform": platform,
            }
        )
    return resources


def _text(element: ET.Element, name: str) -> str | None:
    found = _children(element, name)
    if not found:
        return None
    return (found[0].text or "").strip()


def parse_widget(root: ET.Element) -> dict[str, Any]:
    """Turn a config.xml <widget> element into AppConfig data."""
    icons: list[dict[str, Any]] = []
    splashes: list[dict[str, Any]] = []
    for platform_el in _children(root, "platform"):
        platform = platform_el.get("name")
        icons.extend(_resources(platform_el, "icon", platform))
        splashes.extend(_resources(platform_el, "splash", platform))
    icons.extend(_resources(root, "icon", None))
    splashes.extend(_resources(root, "splash", None))

    data: dict[str, Any] = {
        "name": _text(root, "name") or "",
        "package_name": root.get("id", ""),
        "icons": icons,
        "splash_screens": splashes,
    }
    if root.get("version"):
        data["version"] = root.get("version")
    author = _text(root, "author")
    if author is not None:
        data["author"] = author
    return data


def _load_xml(path: Path) -> dict[str, Any]:
    try:
        document = parse_document(path)
    except XmlDocumentError as e:
        raise AppConfigParseError(str(e)) from e
    if local_name(document.root.tag) != "widget":
        raise AppConfigParseError(f"Expected a <widget> root element in {path}")
    return parse_widget(document.root)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise AppConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise AppConfigError(f"Failed to read app config: {e}") from e


def load_app_config(path: Path) -> AppConfig:
    """Load and validate an app descriptor.

    Args:
        path: Path to config.xml or app.toml.

    Returns:
        Validated AppConfig.

    Raises:
        AppConfigNotFoundError: If the file doesn't exist.
        AppConfigParseError: If the file cannot be parsed.
        AppConfigValidationError: If the content doesn't match the schema.
    """
    if not path.is_file():
        raise AppConfigNotFoundError(f"App config not found: {path}")

    data = _load_toml(path) if path.suffix.lower() == ".toml" else _load_xml(path)

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise AppConfigValidationError(f"Invalid app config content: {e}") from e
