"""Structured JSONL run journal."""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import UTC, datetime
from pathlib import Path


class AuditLogger:
    """Writes step start/finish records as JSON lines."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger("taskrun.journal")

    @staticmethod
    def _hash_arguments(program: str, arguments: list[str]) -> str:
        payload = json.dumps([program, *arguments]).encode("utf-8")
        return hashlib.sha256(payload).hexdigest()

    def log(
        self,
        task: str,
        step_index: int,
        program: str,
        arguments: list[str],
        outcome: str,
        exit_code: int | None = None,
    ) -> None:
        """Append one JSONL journal event."""
        event = {
            "timestamp": datetime.now(UTC).isoformat(),
            "task": task,
            "step_index": step_index,
            "program": program,
            "args_hash": self._hash_arguments(program, arguments),
            "outcome": outcome,
            "exit_code": exit_code,
        }
        line = json.dumps(event, ensure_ascii=True)
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        self.logger.debug(line)

    def read_events(self) -> list[dict]:
        """Load every recorded event, oldest first."""
        if not self.log_path.exists():
            return []
        with self.log_path.open("r", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
