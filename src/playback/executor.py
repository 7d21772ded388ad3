"""
src/playback/executor.py
=========================
Elevated Executor — Announce

Responsibility:
    - Run the playback script behind the configured elevation command
      (``sudo`` by default) as an argument list, never as a shell string
    - Merge stderr into stdout and capture it line by line
    - Return the exit code and captured lines to the caller

This module does NOT:
    - Decide whether the script may run (the handler checks that first)
    - Apply a timeout; the call blocks until the script exits
    - Retry a failed playback
"""

import logging
import subprocess
from dataclasses import dataclass, field
from typing import Sequence

logger = logging.getLogger("announce.executor")

# Exit status a POSIX shell reports when the program cannot be launched
COMMAND_NOT_FOUND_STATUS = 127


@dataclass(frozen=True)
class ExecutionResult:
    returncode: int
    output_lines: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class ElevatedExecutor:
    """
    Run a program with privileges raised by a fixed elevation command.

    Args:
        elevation_command: Prefix arguments, e.g. ``("sudo",)`` or
                           ``("sudo", "-n")``. Empty runs the program as-is.
    """

    def __init__(self, elevation_command: Sequence[str] = ("sudo",)):
        self.elevation_command = tuple(elevation_command)

    def build_argv(self, program: str, *args: str) -> list[str]:
        return [*self.elevation_command, program, *args]

    def run(self, program: str, *args: str) -> ExecutionResult:
        """
        Execute ``program`` with ``args`` and wait for it to finish.

        Returns:
            ExecutionResult with the exit code and the combined
            stdout/stderr split into lines (trailing whitespace removed).
            A program that cannot be launched yields exit code 127 and a
            single "command not found" line instead of an exception.
        """
        argv = self.build_argv(program, *args)
        logger.info("Executing: %s", " ".join(argv))

        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as exc:
            logger.error("Could not launch %s: %s", argv[0], exc)
            return ExecutionResult(
                returncode=COMMAND_NOT_FOUND_STATUS,
                output_lines=[f"{argv[0]}: command not found"],
            )

        output = completed.stdout.decode("utf-8", errors="replace")
        lines = [line.rstrip() for line in output.splitlines()]

        logger.info("Exit code %d (%d output lines)", completed.returncode, len(lines))
        return ExecutionResult(returncode=completed.returncode, output_lines=lines)
