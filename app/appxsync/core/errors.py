"""Error taxonomy for project synchronization.

Every failure raised by the reconcilers and the orchestrator derives from
SyncError so callers can surface them uniformly. Nothing in this package
retries; errors propagate to the caller unchanged.
"""


class SyncError(Exception):
    """Base exception for synchronization errors."""


class ConfigTypeError(SyncError, TypeError):
    """Raised when something other than an AppConfig is supplied."""


class MalformedManifestError(SyncError):
    """Raised when the application manifest cannot be read or parsed."""


class InvalidManifestStructureError(SyncError):
    """Raised when a node required for reconciliation is missing.

    Attributes:
        node_name: Element name of the missing node.
    """

    def __init__(self, node_name: str, manifest_path: object | None = None) -> None:
        self.node_name = node_name
        self.manifest_path = manifest_path
        location = f" in {manifest_path}" if manifest_path is not None else ""
        super().__init__(f"Expected a valid package.appxmanifest with a <{node_name}> node{location}")


class InvalidProjectFileError(SyncError):
    """Raised when the project file cannot be read or is not an MSBuild project."""


class ProjectNotFoundError(SyncError):
    """Raised when a directory does not contain a Windows project file."""


class HookFailureError(SyncError):
    """Raised when a lifecycle hook script fails.

    Attributes:
        hook: Name of the fired event (e.g., "pre_package").
        script: Path of the script that failed, if any.
    """

    def __init__(self, hook: str, message: str, script: object | None = None) -> None:
        self.hook = hook
        self.script = script
        super().__init__(f"Hook '{hook}' failed: {message}")


class AssetError(SyncError):
    """Raised when icons, splash screens or web assets cannot be read, copied or removed."""
