"""Command execution wrapper."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from planner.execution_plan import RunCommand

logger = logging.getLogger("taskrun.executor")

EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class RunContext:
    """Working directory and environment handed to every child process."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None

    @classmethod
    def from_process(cls) -> RunContext:
        """Snapshot the current process cwd and environment."""
        return cls(cwd=Path.cwd(), env=dict(os.environ))


@dataclass
class CommandResult:
    """Exit status of one finished command.

    `error` explains why the command could not be started at all; it is
    empty when the program ran and exited on its own.
    """

    command: RunCommand
    exit_code: int
    error: str = field(default="")

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def run_command(command: RunCommand, context: RunContext) -> CommandResult:
    """Run command to completion with inherited stdio and return its status."""
    if context.cwd is not None and not Path(context.cwd).is_dir():
        logger.error("Working directory not found: %s", context.cwd)
        return CommandResult(
            command=command,
            exit_code=EXIT_NOT_FOUND,
            error=f"Working directory not found: {context.cwd}",
        )
    env = dict(context.env) if context.env is not None else None
    try:
        proc = subprocess.run(command.argv, cwd=context.cwd, env=env, check=False)
    except FileNotFoundError as exc:
        logger.error("Program not found: %s", command.program)
        return CommandResult(command=command, exit_code=EXIT_NOT_FOUND, error=str(exc))
    except PermissionError as exc:
        logger.error("Program not executable: %s", command.program)
        return CommandResult(command=command, exit_code=EXIT_NOT_EXECUTABLE, error=str(exc))
    except OSError as exc:
        logger.error("Cannot execute %s: %s", command.program, exc)
        return CommandResult(command=command, exit_code=EXIT_NOT_EXECUTABLE, error=str(exc))
    return CommandResult(command=command, exit_code=proc.returncode)
