"""CLI entrypoint for taskrun."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

import typer

from core.logging_setup import setup_logging
from core.orchestrator import Orchestrator, RuntimeBundle
from core.runtime_config import logging_level
from planner.errors import TaskRunnerError
from ui.cli import commands

ROOT_ENV = "TASKRUN_ROOT"
TASKS_FILE_ENV = "TASKRUN_TASKS_FILE"


def _task_command(bundle: RuntimeBundle, name: str) -> Callable[[], None]:
    def command() -> None:
        commands.run_task(bundle, name)

    command.__name__ = name.replace("-", "_")
    return command


def create_app(bundle: RuntimeBundle) -> typer.Typer:
    """Build a Typer app with one subcommand per registered task."""
    app = typer.Typer(
        help="Run project tasks declared in config/tasks.yaml.",
        invoke_without_command=True,
        add_completion=False,
    )

    @app.callback()
    def main_callback(
        ctx: typer.Context,
        dry_run: bool = typer.Option(
            False, "--dry-run", help="Print the commands a task would run without running them."
        ),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
        list_all: bool = typer.Option(False, "--list", help="List declared tasks and exit."),
    ) -> None:
        if verbose:
            setup_logging(logging.DEBUG)
        bundle.runner.dry_run = dry_run
        if list_all:
            commands.list_tasks(bundle)
            raise typer.Exit()
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit(code=commands.EXIT_UNKNOWN_TASK)

    for name in bundle.registry.task_names():
        app.command(name, help=bundle.registry.describe(name) or None)(
            _task_command(bundle, name)
        )
    commands.echo_progress(bundle)
    return app


def _build_bundle() -> RuntimeBundle:
    root = os.environ.get(ROOT_ENV)
    tasks_file = os.environ.get(TASKS_FILE_ENV)
    orchestrator = Orchestrator(
        root=Path(root) if root else None,
        tasks_file=Path(tasks_file) if tasks_file else None,
    )
    return orchestrator.build()


def main() -> None:
    """Console script entrypoint."""
    try:
        bundle = _build_bundle()
        setup_logging(logging_level(bundle.config))
    except (TaskRunnerError, ValueError, OSError) as exc:
        typer.echo(f"taskrun: {exc}", err=True)
        raise SystemExit(commands.EXIT_CONFIG_ERROR) from exc
    create_app(bundle)()


if __name__ == "__main__":
    main()
