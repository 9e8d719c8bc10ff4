"""Shell command execution for package-manager patch workflows.

Commands run one at a time with full stdout/stderr capture. There is no
timeout and no retry: a hung package manager blocks the run.
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from nextpatch.types import CommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured output of a successful command."""

    command: str
    stdout: str = ""
    stderr: str = ""


def quote(value: Union[str, Path]) -> str:
    """Shell-quote a single argument for interpolation into a command."""
    return shlex.quote(str(value))


def run_command(command: str, cwd: Optional[Path] = None) -> CommandResult:
    """Run a shell command and return its captured output.

    Raises CommandError if the process cannot be spawned or exits non-zero.
    A process killed by a signal reports a negative exit code.
    """
    logger.debug("Running command: %s (cwd=%s)", command, cwd)

    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise CommandError(
            command,
            exit_code=-1,
            stderr=str(exc),
            message=f"Command '{command}' could not be started: {exc}",
        ) from exc

    if result.returncode != 0:
        logger.debug("Command failed (exit=%d): %s", result.returncode, command)
        raise CommandError(
            command,
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    return CommandResult(command=command, stdout=result.stdout, stderr=result.stderr)
