"""Typer command handlers."""

from __future__ import annotations

import typer

from core.event_bus import STEP_STARTED, StepEvent
from core.orchestrator import RuntimeBundle
from planner.errors import (
    CyclicDependencyError,
    DuplicateTaskError,
    StepFailedError,
    TaskConfigError,
    UnknownTaskError,
)

EXIT_STEP_FAILED = 1
EXIT_UNKNOWN_TASK = 2
EXIT_CONFIG_ERROR = 3


def echo_progress(bundle: RuntimeBundle) -> None:
    """Print each command to stderr just before it starts."""

    def _on_started(event: StepEvent) -> None:
        prefix = "==> (dry run)" if event.dry_run else "==>"
        typer.echo(f"{prefix} {event.command.display()}", err=True)

    bundle.event_bus.subscribe(STEP_STARTED, _on_started)


def run_task(bundle: RuntimeBundle, name: str) -> None:
    """Resolve and run one task, mapping failures to exit codes."""
    try:
        bundle.runner.run_by_name(name)
    except StepFailedError as exc:
        typer.echo(f"taskrun: {name}: {exc}", err=True)
        raise typer.Exit(code=EXIT_STEP_FAILED) from exc
    except UnknownTaskError as exc:
        typer.echo(f"taskrun: {exc}", err=True)
        raise typer.Exit(code=EXIT_UNKNOWN_TASK) from exc
    except (CyclicDependencyError, DuplicateTaskError, TaskConfigError) as exc:
        typer.echo(f"taskrun: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc


def list_tasks(bundle: RuntimeBundle) -> None:
    """Print registered task names with their descriptions."""
    registry = bundle.registry
    names = registry.task_names()
    if not names:
        typer.echo("No tasks declared.")
        return
    width = max(len(name) for name in names)
    for name in names:
        description = registry.describe(name)
        typer.echo(f"{name.ljust(width)}  {description}".rstrip())
