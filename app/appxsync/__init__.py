"""appxsync - keep Windows Store project files in sync with the app descriptor."""

__version__ = "0.3.0"
