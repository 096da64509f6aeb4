"""Error taxonomy for task registration, resolution and execution."""

from __future__ import annotations


class TaskRunnerError(Exception):
    """Base class for every error raised by the runner."""


class DuplicateTaskError(TaskRunnerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Task already registered: {name}")
        self.name = name


class UnknownTaskError(TaskRunnerError):
    def __init__(self, name: str, referenced_by: str | None = None) -> None:
        message = f"Unknown task: {name}"
        if referenced_by:
            message += f" (referenced by '{referenced_by}')"
        super().__init__(message)
        self.name = name
        self.referenced_by = referenced_by


class CyclicDependencyError(TaskRunnerError):
    def __init__(self, path: list[str]) -> None:
        super().__init__(f"Cyclic task dependency: {' -> '.join(path)}")
        self.path = list(path)


class TaskConfigError(TaskRunnerError):
    """Task declarations or runner settings could not be loaded or validated."""


class StepFailedError(TaskRunnerError):
    """An external command exited with a non-zero status or could not start."""

    def __init__(self, step_index: int, program: str, exit_code: int, detail: str = "") -> None:
        message = f"Step {step_index} ({program}) failed with exit code {exit_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.step_index = step_index
        self.program = program
        self.exit_code = exit_code
        self.detail = detail
