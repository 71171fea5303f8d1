"""
Shell command runner for linecmd.
Backs the built-in shell escape ("shell" / "!").
"""
import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Optional

from ..constants import DEFAULT_SHELL

logger = logging.getLogger(__name__)


@dataclass
class ShellResult:
    """Result of a shell command execution."""
    stdout: str
    stderr: str
    return_code: int
    command: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        """Check if command succeeded."""
        return self.return_code == 0


class ShellRunner:
    """
    Runs commands through the user's shell.

    Failures never raise: they come back as a ShellResult with a non-zero
    return code and the reason in stderr.
    """

    def __init__(self, shell: Optional[str] = None, timeout: Optional[int] = None) -> None:
        """
        Initialize the runner.

        Args:
            shell: Shell executable (defaults to $SHELL, then /bin/sh)
            timeout: Timeout in seconds for captured commands; None waits forever
        """
        self._shell = shell or os.environ.get("SHELL") or DEFAULT_SHELL
        self._timeout = timeout

    @property
    def shell(self) -> str:
        return self._shell

    def run(self, command: str) -> ShellResult:
        """
        Run a command and capture its output.

        Args:
            command: Command line handed to the shell with -c

        Returns:
            ShellResult with whitespace-trimmed output
        """
        logger.debug(f"Running {command!r} with {self._shell}")
        try:
            result = subprocess.run(
                [self._shell, "-c", command],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
            return ShellResult(
                stdout=result.stdout.strip() if result.stdout else "",
                stderr=result.stderr.strip() if result.stderr else "",
                return_code=result.returncode,
                command=command,
            )
        except subprocess.TimeoutExpired:
            return ShellResult(
                stdout="",
                stderr=f"Command timed out after {self._timeout} seconds",
                return_code=-1,
                command=command,
                timed_out=True,
            )
        except OSError as e:
            logger.warning(f"Could not start {self._shell}: {e}")
            return ShellResult(stdout="", stderr=str(e), return_code=-1, command=command)

    def run_interactive(self) -> int:
        """
        Start an interactive shell on the current terminal and wait for it.

        Returns:
            The shell's exit status, or -1 when it could not be started
        """
        try:
            return subprocess.call([self._shell])
        except OSError as e:
            logger.warning(f"Could not start {self._shell}: {e}")
            return -1
