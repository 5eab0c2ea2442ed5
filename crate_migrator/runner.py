"""Process runner — executes package manager commands and captures stdout."""

from __future__ import annotations

import logging
import shutil
import subprocess

from crate_migrator.exceptions import ExternalToolError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_TIMEOUT = 60.0  # seconds per external process


class CommandRunner:
    """Run external commands, returning stdout as a list of lines.

    Any failure (missing executable, non-zero exit, timeout) raises
    ExternalToolError. Callers decide whether that is fatal.
    """

    def __init__(self, timeout: float | None = DEFAULT_COMMAND_TIMEOUT) -> None:
        self.timeout = timeout

    def run(self, command: str, args: list[str]) -> list[str]:
        cmd = [command, *args]
        cmdline = " ".join(cmd)
        logger.debug("Running: %s", cmdline)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ExternalToolError(cmdline, f"executable '{command}' not found")
        except subprocess.TimeoutExpired:
            raise ExternalToolError(cmdline, f"timed out after {self.timeout}s")

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ExternalToolError(
                cmdline,
                f"exit {result.returncode}: {stderr[-500:]}",
            )
        return result.stdout.splitlines()

    def run_contains(self, command: str, args: list[str], pattern: str) -> bool:
        """True when any stdout line contains *pattern*."""
        return any(pattern in line for line in self.run(command, args))

    def is_available(self, command: str) -> bool:
        return shutil.which(command) is not None
