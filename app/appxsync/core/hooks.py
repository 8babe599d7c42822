"""Lifecycle hooks fired around project synchronization.

Hook scripts live in `<app_root>/hooks/<event>/` and run in sorted name
order. The payload reaches them through environment variables:

- APPXSYNC_HOOK: event name (e.g. "pre_package")
- APPXSYNC_WWW_PATH: resolved web asset root
- APPXSYNC_PLATFORMS: comma-separated platform tags
- APPXSYNC_PROJECT_ROOT: app root directory

Firing blocks until every script has finished; the first failing script
aborts the event.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from appxsync.core.errors import HookFailureError
from appxsync.utils.shell import run_command

logger = logging.getLogger(__name__)

HOOKS_DIRNAME = "hooks"
PRE_PACKAGE = "pre_package"


@dataclass(frozen=True, slots=True)
class HookPayload:
    """Data handed to hook scripts.

    Attributes:
        www_path: Web asset root the hook may modify.
        platforms: Platform tags being prepared.
    """

    www_path: Path
    platforms: tuple[str, ...]


class HookRunner(Protocol):
    """Anything that can fire a named lifecycle event."""

    def fire(self, event: str, payload: HookPayload) -> None:
        """Run the event's hooks, raising HookFailureError on failure."""
        ...


class NullHookRunner:
    """Hook runner that does nothing (used with --skip-hooks)."""

    def fire(self, event: str, payload: HookPayload) -> None:
        logger.debug("Hooks disabled, not firing %s", event)


class ScriptHookRunner:
    """Runs executable scripts from the app's hooks directory.

    Args:
        app_root: App root containing the `hooks/` directory.
        timeout: Per-script timeout in seconds. None waits indefinitely.
    """

    def __init__(self, app_root: Path, *, timeout: float | None = None) -> None:
        self._app_root = app_root.resolve()
        self._timeout = timeout

    def scripts_for(self, event: str) -> list[Path]:
        """Executable scripts registered for an event, in run order."""
        hook_dir = self._app_root / HOOKS_DIRNAME / event
        if not hook_dir.is_dir():
            return []
        return [
            script
            for script in sorted(hook_dir.iterdir())
            if script.is_file() and not script.name.startswith(".") and os.access(script, os.X_OK)
        ]

    def fire(self, event: str, payload: HookPayload) -> None:
        """Run every script for `event`.

        Raises:
            HookFailureError: If a script exits non-zero, cannot be started,
                or exceeds the timeout.
        """
        scripts = self.scripts_for(event)
        if not scripts:
            logger.debug("No hooks for %s", event)
            return

        env = {
            "APPXSYNC_HOOK": event,
            "APPXSYNC_WWW_PATH": str(payload.www_path),
            "APPXSYNC_PLATFORMS": ",".join(payload.platforms),
            "APPXSYNC_PROJECT_ROOT": str(self._app_root),
        }

        for script in scripts:
            logger.info("Running %s hook %s", event, script.name)
            try:
                result = run_command(
                    [str(script)],
                    timeout=self._timeout,
                    cwd=str(self._app_root),
                    env=env,
                )
            except subprocess.TimeoutExpired as e:
                raise HookFailureError(event, f"{script.name} timed out after {e.timeout}s", script) from e
            except OSError as e:
                raise HookFailureError(event, f"{script.name} could not be run: {e}", script) from e

            if result.stdout.strip():
                logger.debug("%s: %s", script.name, result.stdout.strip())
            if not result.success:
                detail = result.stderr.strip() or f"exit code {result.returncode}"
                raise HookFailureError(event, f"{script.name}: {detail}", script)
