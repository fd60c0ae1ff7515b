"""
GitHub Actions runtime commands.

Implements the parts of the Actions runner protocol xcsetup needs: reading
step inputs from ``INPUT_*`` variables, writing outputs and PATH entries to the
runner's command files, and marking the step failed with an error annotation.
"""

import logging
import os
import sys
import uuid
from pathlib import Path
from typing import Dict, MutableMapping, Optional, TextIO, Union

from xcsetup.core.exceptions import InputError

logger = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


class ActionsRuntime:
    """
    Inputs, outputs, PATH and failure reporting for a workflow step.

    Outside a runner (no GITHUB_OUTPUT / GITHUB_PATH) the equivalent workflow
    commands are printed to stdout instead.

    Example:
        >>> runtime = ActionsRuntime()
        >>> compiler = runtime.get_input("compiler", required=True)
        >>> runtime.set_output("compiler-path", "/opt/microchip/xc8/v3.10/bin")
    """

    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ):
        """
        Initialize the runtime.

        Args:
            environ: Environment to read and update (default: os.environ)
            stream: Where workflow commands are written (default: sys.stdout)
        """
        self.environ = os.environ if environ is None else environ
        self.stream = stream
        self.failed = False
        self.outputs: Dict[str, str] = {}

    def _issue(self, command: str, message: str = "", **properties: str) -> None:
        props = ",".join(f"{k}={_escape_property(v)}" for k, v in properties.items())
        cmd = f"::{command} {props}::" if props else f"::{command}::"
        print(f"{cmd}{_escape_data(message)}", file=self.stream or sys.stdout, flush=True)

    def _append_file_command(self, variable: str, line: str) -> bool:
        path = self.environ.get(variable)
        if not path:
            return False

        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Unable to find file for {variable}: {path}")

        with open(file_path, "a", encoding="utf-8") as f:
            f.write(f"{line}\n")
        return True

    def get_input(self, name: str, required: bool = False) -> str:
        """
        Read a step input.

        Raises:
            InputError: If the input is required and empty
        """
        key = f"INPUT_{name.replace(' ', '_').upper()}"
        value = self.environ.get(key, "").strip()
        if required and not value:
            raise InputError(f"Input required and not supplied: {name}")
        return value

    def set_output(self, name: str, value: Union[str, Path]) -> None:
        """Set a step output."""
        value = str(value)
        self.outputs[name] = value
        logger.debug(f"Setting output {name}={value}")

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if self._append_file_command(
            "GITHUB_OUTPUT", f"{name}<<{delimiter}\n{value}\n{delimiter}"
        ):
            return
        self._issue("set-output", value, name=name)

    def add_path(self, path: Union[str, Path]) -> None:
        """Prepend a directory to PATH for this process and later steps."""
        path = str(path)
        logger.debug(f"Adding {path} to PATH")
        if not self._append_file_command("GITHUB_PATH", path):
            self._issue("add-path", path)

        current = self.environ.get("PATH", "")
        self.environ["PATH"] = f"{path}{os.pathsep}{current}" if current else path

    def set_failed(self, message: str) -> None:
        """Report an error annotation and mark the step failed."""
        self.failed = True
        self._issue("error", message)

    def is_debug(self) -> bool:
        return self.environ.get("RUNNER_DEBUG") == "1"
