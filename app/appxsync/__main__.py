"""Allow running as `python -m appxsync`."""

from appxsync.cli.main import app

app()
