"""Task registry and dependency resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from planner.errors import CyclicDependencyError, DuplicateTaskError, UnknownTaskError
from planner.execution_plan import ExecutionPlan, RunCommand, RunTask, Step

logger = logging.getLogger("taskrun.planner")


@dataclass(frozen=True)
class Task:
    """A named, ordered list of steps."""

    name: str
    steps: tuple[Step, ...] = ()
    description: str = ""


class TaskRegistry:
    """Holds task declarations and resolves them into execution plans."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._frozen = False

    def register(self, name: str, steps: Iterable[Step], description: str = "") -> Task:
        """Add a task. Fails if the name is taken or the registry is frozen."""
        if self._frozen:
            raise RuntimeError("Task registry is frozen.")
        if name in self._tasks:
            raise DuplicateTaskError(name)
        checked: list[Step] = []
        for step in steps:
            if not isinstance(step, (RunCommand, RunTask)):
                raise TypeError(f"Unsupported step for task '{name}': {step!r}")
            checked.append(step)
        task = Task(name=name, steps=tuple(checked), description=description)
        self._tasks[name] = task
        logger.debug("Registered task '%s' with %d step(s)", name, len(checked))
        return task

    def freeze(self) -> None:
        self._frozen = True

    def get(self, name: str) -> Task:
        task = self._tasks.get(name)
        if task is None:
            raise UnknownTaskError(name)
        return task

    def task_names(self) -> list[str]:
        return list(self._tasks)

    def describe(self, name: str) -> str:
        return self.get(name).description

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def resolve(self, name: str) -> ExecutionPlan:
        """Expand a task depth-first into a flat list of commands."""
        if name not in self._tasks:
            raise UnknownTaskError(name)
        plan = ExecutionPlan(goal=name)
        self._expand(name, path=[], plan=plan)
        logger.debug("Resolved '%s' into %d command(s)", name, len(plan))
        return plan

    def _expand(self, name: str, path: list[str], plan: ExecutionPlan) -> None:
        if name in path:
            raise CyclicDependencyError([*path[path.index(name):], name])
        task = self._tasks.get(name)
        if task is None:
            raise UnknownTaskError(name, referenced_by=path[-1] if path else None)
        path.append(name)
        for step in task.steps:
            if isinstance(step, RunTask):
                self._expand(step.task_name, path, plan)
            else:
                plan.append(step)
        path.pop()
