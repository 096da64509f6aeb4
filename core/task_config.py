"""Task declaration schema and registry loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from core.runtime_config import load_yaml
from planner.dependency_graph import TaskRegistry
from planner.errors import TaskConfigError
from planner.execution_plan import RunCommand, RunTask, Step


class StepModel(BaseModel):
    """One declared step: either `run` (argv) or `task` (reference)."""

    model_config = ConfigDict(extra="forbid")

    run: list[str] | None = None
    task: str | None = None
    idempotent: bool = False

    @model_validator(mode="after")
    def _exactly_one_kind(self) -> StepModel:
        if (self.run is None) == (self.task is None):
            raise ValueError("step needs exactly one of 'run' or 'task'")
        if self.run is not None and not self.run:
            raise ValueError("'run' must name a program")
        if self.task is not None and self.idempotent:
            raise ValueError("'idempotent' applies to 'run' steps only")
        return self

    def to_step(self) -> Step:
        if self.task is not None:
            return RunTask(task_name=self.task)
        program, *arguments = self.run or []
        return RunCommand(program=program, arguments=tuple(arguments), idempotent=self.idempotent)


class TaskModel(BaseModel):
    """Declared task."""

    model_config = ConfigDict(extra="forbid")

    description: str = ""
    steps: list[StepModel] = Field(default_factory=list)


class TaskFileModel(BaseModel):
    """Top-level task declaration document."""

    tasks: dict[str, TaskModel] = Field(default_factory=dict)


def parse_task_file(data: dict[str, Any], source: str = "<memory>") -> TaskFileModel:
    try:
        return TaskFileModel.model_validate(data)
    except ValidationError as exc:
        raise TaskConfigError(f"Invalid task declarations in {source}:\n{exc}") from exc


def build_registry(document: TaskFileModel) -> TaskRegistry:
    """Register every declared task, in file order, and freeze the registry."""
    registry = TaskRegistry()
    for name, task in document.tasks.items():
        registry.register(
            name,
            [step.to_step() for step in task.steps],
            description=task.description,
        )
    registry.freeze()
    return registry


def load_registry(path: Path) -> TaskRegistry:
    """Read, validate and register the tasks declared in a YAML file."""
    if not path.exists():
        raise TaskConfigError(f"Task file not found: {path}")
    try:
        data = load_yaml(path)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise TaskConfigError(str(exc)) from exc
    return build_registry(parse_task_file(data, source=str(path)))
