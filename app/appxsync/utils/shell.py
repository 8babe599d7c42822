"""Subprocess helper used to run hook scripts."""

import logging
import os
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured output and exit status of a finished process."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run a process to completion and capture its text output.

    `env` entries are layered over the current environment. Output is decoded
    as UTF-8 with undecodable bytes replaced. A non-zero exit is reported
    through the result, not raised.

    Raises:
        subprocess.TimeoutExpired: If the process outlives `timeout` seconds.
        OSError: If the executable cannot be started.
    """
    logger.debug("Running %s (cwd=%s)", " ".join(args), cwd or ".")
    completed = subprocess.run(
        args,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout,
        cwd=cwd,
        env={**os.environ, **env} if env else None,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)
