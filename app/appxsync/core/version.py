"""App version coercion for the appx manifest.

The manifest schema requires four numeric components (major.minor.build.revision)
while app descriptors usually carry two or three.
"""

import re

_DOTTED_DIGIT = re.compile(r"\.\d")

# Components required by the Identity/@Version attribute
MANIFEST_VERSION_COMPONENTS = 4


def normalize_version(version: str) -> str:
    """Pad a dotted version string to four components.

    Strings without any dotted-digit component (e.g. "1" or "beta") are
    returned unchanged.

    Args:
        version: Version string from the app descriptor.

    Returns:
        Version with ".0" segments appended up to four components.

    Examples:
        >>> normalize_version("1.2")
        '1.2.0.0'
        >>> normalize_version("1")
        '1'
    """
    if not version:
        return version

    matches = _DOTTED_DIGIT.findall(version)
    if not matches:
        return version

    components = len(matches) + 1
    while components < MANIFEST_VERSION_COMPONENTS:
        version += ".0"
        components += 1
    return version
