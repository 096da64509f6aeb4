"""In-process event bus for step lifecycle notifications."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, replace

from planner.execution_plan import RunCommand

STEP_STARTED = "step.started"
STEP_FINISHED = "step.finished"


@dataclass(frozen=True)
class StepEvent:
    """One step of a running plan. exit_code is set on step.finished only."""

    task: str
    step_index: int
    total: int
    command: RunCommand
    dry_run: bool = False
    exit_code: int | None = None

    def finished(self, exit_code: int) -> StepEvent:
        return replace(self, exit_code=exit_code)


StepHandler = Callable[[StepEvent], None]


class EventBus:
    """Dispatches step events to subscribers by event name."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[StepHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: StepHandler) -> None:
        if event_name not in (STEP_STARTED, STEP_FINISHED):
            raise ValueError(f"Unknown event: {event_name}")
        self._handlers[event_name].append(handler)

    def emit(self, event_name: str, event: StepEvent) -> None:
        """Call every subscriber of event_name in subscription order."""
        for handler in self._handlers.get(event_name, []):
            handler(event)
