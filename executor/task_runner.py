"""Sequential plan execution with journaling and lifecycle events."""

from __future__ import annotations

import logging
from collections.abc import Callable

from core.event_bus import STEP_FINISHED, STEP_STARTED, EventBus, StepEvent
from executor.command_executor import CommandResult, RunContext, run_command
from governance.audit_logger import AuditLogger
from planner.dependency_graph import TaskRegistry
from planner.errors import StepFailedError
from planner.execution_plan import ExecutionPlan, RunCommand

logger = logging.getLogger("taskrun.runner")

CommandExecutor = Callable[[RunCommand, RunContext], CommandResult]


class TaskRunner:
    """Runs execution plans one command at a time, stopping at the first failure."""

    def __init__(
        self,
        registry: TaskRegistry,
        context: RunContext | None = None,
        executor: CommandExecutor = run_command,
        event_bus: EventBus | None = None,
        journal: AuditLogger | None = None,
        dry_run: bool = False,
    ) -> None:
        self.registry = registry
        self.context = context or RunContext()
        self.executor = executor
        self.event_bus = event_bus or EventBus()
        self.journal = journal
        self.dry_run = dry_run

    def run(self, plan: ExecutionPlan, context: RunContext | None = None) -> None:
        """Execute every command of the plan in order.

        Raises StepFailedError for the first command that exits non-zero;
        commands after it are never started and earlier ones are not undone.
        """
        context = context or self.context
        total = len(plan)
        for index, command in enumerate(plan):
            event = StepEvent(
                task=plan.goal,
                step_index=index,
                total=total,
                command=command,
                dry_run=self.dry_run,
            )
            self.event_bus.emit(STEP_STARTED, event)
            if self.dry_run:
                logger.info("[dry-run] %s", command.display())
                self.event_bus.emit(STEP_FINISHED, event.finished(0))
                continue

            logger.info("Step %d/%d: %s", index + 1, total, command.display())
            self._record(plan.goal, index, command, outcome="started")
            result = self.executor(command, context)
            self._record(
                plan.goal,
                index,
                command,
                outcome="success" if result.success else "failed",
                exit_code=result.exit_code,
            )
            self.event_bus.emit(STEP_FINISHED, event.finished(result.exit_code))
            if not result.success:
                logger.error(
                    "Step %d (%s) exited with %d", index, command.program, result.exit_code
                )
                raise StepFailedError(
                    index, command.program, result.exit_code, detail=result.error
                )
        logger.debug("Plan '%s' finished: %d step(s)", plan.goal, total)

    def run_by_name(self, name: str, context: RunContext | None = None) -> ExecutionPlan:
        """Resolve a task and run its plan. Returns the executed plan."""
        plan = self.registry.resolve(name)
        self.run(plan, context)
        return plan

    def _record(
        self,
        task: str,
        index: int,
        command: RunCommand,
        outcome: str,
        exit_code: int | None = None,
    ) -> None:
        if self.journal is None:
            return
        self.journal.log(
            task=task,
            step_index=index,
            program=command.program,
            arguments=list(command.arguments),
            outcome=outcome,
            exit_code=exit_code,
        )
