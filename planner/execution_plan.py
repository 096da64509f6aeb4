"""Execution plan models."""

from __future__ import annotations

import shlex
from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RunCommand:
    """Invoke an external program with a fixed argument list."""

    program: str
    arguments: tuple[str, ...] = ()
    idempotent: bool = False

    def __post_init__(self) -> None:
        # arguments is always a tuple; steps are hashable.
        object.__setattr__(self, "arguments", tuple(self.arguments))

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.arguments]

    def display(self) -> str:
        return shlex.join(self.argv)

    def same_invocation(self, other: RunCommand) -> bool:
        return self.program == other.program and self.arguments == other.arguments


@dataclass(frozen=True)
class RunTask:
    """Inline the steps of another registered task."""

    task_name: str


Step = RunCommand | RunTask


@dataclass
class ExecutionPlan:
    """Flattened, ordered list of commands for one requested task."""

    goal: str
    steps: list[RunCommand] = field(default_factory=list)

    def __iter__(self) -> Iterator[RunCommand]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def append(self, step: RunCommand) -> None:
        """Add a command, collapsing an adjacent repeat of an idempotent command."""
        if self.steps:
            previous = self.steps[-1]
            if previous.idempotent and step.idempotent and previous.same_invocation(step):
                return
        self.steps.append(step)
