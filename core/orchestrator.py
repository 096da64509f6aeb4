"""Top-level application orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.event_bus import EventBus
from core.runtime_config import journal_enabled, load_effective_config, resolve_paths
from core.task_config import load_registry
from executor.command_executor import RunContext
from executor.task_runner import TaskRunner
from governance.audit_logger import AuditLogger
from planner.dependency_graph import TaskRegistry


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    registry: TaskRegistry
    runner: TaskRunner
    event_bus: EventBus
    journal: AuditLogger | None


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(
        self,
        root: Path | None = None,
        tasks_file: Path | None = None,
        context: RunContext | None = None,
    ) -> None:
        self.root = (root or Path.cwd()).resolve()
        if tasks_file is not None and not tasks_file.is_absolute():
            tasks_file = self.root / tasks_file
        self.tasks_file = tasks_file
        self.context = context

    def build(self, dry_run: bool = False) -> RuntimeBundle:
        config = load_effective_config(self.root)
        paths = resolve_paths(self.root, config)
        registry = load_registry(self.tasks_file or paths["tasks_file"])

        journal = None
        if journal_enabled(config) and not dry_run:
            journal = AuditLogger(paths["journal_path"])

        event_bus = EventBus()
        context = self.context or RunContext.from_process()
        runner = TaskRunner(
            registry=registry,
            context=context,
            event_bus=event_bus,
            journal=journal,
            dry_run=dry_run,
        )
        return RuntimeBundle(
            config=config,
            registry=registry,
            runner=runner,
            event_bus=event_bus,
            journal=journal,
        )
