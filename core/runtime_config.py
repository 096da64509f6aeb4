"""Runner configuration loading and path resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from planner.errors import TaskConfigError

DEFAULT_TASKS_FILE = "config/tasks.yaml"
DEFAULT_JOURNAL_PATH = "logs/runs.jsonl"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path) -> dict[str, Any]:
    """Merge config/default.yaml with the optional config/local.yaml override."""
    config_dir = root / "config"
    try:
        default_cfg = load_yaml(config_dir / "default.yaml")
        local_cfg = load_yaml(config_dir / "local.yaml")
    except (ValueError, OSError, yaml.YAMLError) as exc:
        raise TaskConfigError(f"Invalid runner config in {config_dir}: {exc}") from exc
    return merge_dicts(default_cfg, local_cfg)


def config_section(config: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a mapping section, treating an empty `name:` key as absent."""
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise TaskConfigError(f"Config section '{name}' must be a mapping.")
    return section


def resolve_paths(root: Path, config: dict[str, Any]) -> dict[str, Path]:
    """Resolve the task declaration file and journal path against root."""
    journal_cfg = config_section(config, "journal")
    tasks_file = (root / (config.get("tasks_file") or DEFAULT_TASKS_FILE)).resolve()
    journal_path = (root / (journal_cfg.get("path") or DEFAULT_JOURNAL_PATH)).resolve()
    return {
        "tasks_file": tasks_file,
        "journal_path": journal_path,
    }


def journal_enabled(config: dict[str, Any]) -> bool:
    return bool(config_section(config, "journal").get("enabled", False))


def logging_level(config: dict[str, Any]) -> str:
    return str(config_section(config, "logging").get("level") or "WARNING")
