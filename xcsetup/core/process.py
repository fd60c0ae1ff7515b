"""
External command execution.

Thin wrapper around subprocess.run that either streams a command's output to
the job log or captures it for inspection, and turns start-up failures and
non-zero exit codes into CommandError.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

from xcsetup.core.exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of a finished command."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def run_command(
    args: Sequence[Union[str, Path]],
    silent: bool = False,
    ignore_return_code: bool = False,
) -> CommandResult:
    """
    Run an external command to completion.

    Args:
        args: Executable followed by its arguments
        silent: Capture output instead of streaming it to the log
        ignore_return_code: Return non-zero exit codes instead of raising

    Returns:
        CommandResult with exit code and (when silent) captured output

    Raises:
        CommandError: If the command cannot be started, or exits non-zero
            and ignore_return_code is False

    Example:
        >>> result = run_command(["dpkg", "-l", "libc6:i386"], silent=True,
        ...                      ignore_return_code=True)
        >>> result.exit_code
        0
    """
    cmd = [str(arg) for arg in args]
    if not cmd:
        raise ValueError("Command cannot be empty")

    if not silent:
        logger.info(f"[command]{' '.join(cmd)}")
    else:
        logger.debug(f"Running: {' '.join(cmd)}")

    try:
        completed = subprocess.run(
            cmd,
            capture_output=silent,
            text=True,
            check=False,
        )
    except OSError as e:
        raise CommandError(f"Unable to run '{cmd[0]}': {e}", cmd) from e

    result = CommandResult(
        exit_code=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )

    if not result.ok and not ignore_return_code:
        raise CommandError(
            f"The process '{cmd[0]}' failed with exit code {result.exit_code}",
            cmd,
            result.exit_code,
        )

    return result
