"""Configuration loading and task declaration validation tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.orchestrator import Orchestrator
from core.runtime_config import (
    journal_enabled,
    load_effective_config,
    load_yaml,
    logging_level,
    resolve_paths,
)
from core.task_config import load_registry, parse_task_file
from planner.errors import TaskConfigError
from planner.execution_plan import RunCommand, RunTask

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_shipped_tasks_match_makefile_targets() -> None:
    registry = load_registry(REPO_ROOT / "config" / "tasks.yaml")

    assert registry.task_names() == ["lint", "check", "test", "build", "build-release"]
    assert [s.display() for s in registry.resolve("lint")] == [
        "cargo fmt --all",
        "rustup component add clippy",
        "cargo clippy -- -D warnings",
    ]
    assert registry.resolve("check").steps == [RunCommand("cargo", ["c"])]
    assert registry.resolve("build-release").steps == [RunCommand("cargo", ["build", "--release"])]


def test_steps_parse_into_tagged_variants() -> None:
    document = parse_task_file(
        {
            "tasks": {
                "fmt": {"steps": [{"run": ["formatter", "--all"], "idempotent": True}]},
                "lint": {
                    "description": "lint it",
                    "steps": [{"task": "fmt"}, {"run": ["lint-tool", "-D", "warnings"]}],
                },
            }
        }
    )

    steps = [step.to_step() for step in document.tasks["lint"].steps]
    assert steps == [RunTask("fmt"), RunCommand("lint-tool", ["-D", "warnings"])]
    fmt_step = document.tasks["fmt"].steps[0].to_step()
    assert isinstance(fmt_step, RunCommand) and fmt_step.idempotent


@pytest.mark.parametrize(
    "step",
    [
        {},
        {"run": ["cargo"], "task": "build"},
        {"run": []},
        {"task": "fmt", "idempotent": True},
        {"run": ["cargo"], "shell": True},
    ],
)
def test_invalid_steps_are_rejected(step: dict) -> None:
    with pytest.raises(TaskConfigError):
        parse_task_file({"tasks": {"bad": {"steps": [step]}}})


def test_missing_task_file_is_config_error(tmp_path: Path) -> None:
    with pytest.raises(TaskConfigError):
        load_registry(tmp_path / "nope.yaml")


def test_malformed_yaml_is_config_error(tmp_path: Path) -> None:
    path = tmp_path / "tasks.yaml"
    path.write_text("tasks: [unclosed\n", encoding="utf-8")
    with pytest.raises(TaskConfigError):
        load_registry(path)


def test_loaded_registry_is_frozen(tmp_path: Path) -> None:
    path = tmp_path / "tasks.yaml"
    path.write_text("tasks:\n  test:\n    steps:\n      - run: [cargo, test]\n", encoding="utf-8")
    registry = load_registry(path)
    with pytest.raises(RuntimeError):
        registry.register("extra", [])


def test_load_yaml_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_yaml(path)


def test_local_config_overrides_defaults(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "default.yaml").write_text(
        "logging:\n  level: WARNING\njournal:\n  enabled: false\n  path: logs/runs.jsonl\n",
        encoding="utf-8",
    )
    (config_dir / "local.yaml").write_text("journal:\n  enabled: true\n", encoding="utf-8")

    config = load_effective_config(tmp_path)
    paths = resolve_paths(tmp_path, config)

    assert journal_enabled(config) is True
    assert config["logging"]["level"] == "WARNING"
    assert paths["journal_path"] == (tmp_path / "logs" / "runs.jsonl").resolve()
    assert paths["tasks_file"] == (tmp_path / "config" / "tasks.yaml").resolve()


def test_malformed_runner_config_is_config_error(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "local.yaml").write_text("logging: [unclosed\n", encoding="utf-8")

    with pytest.raises(TaskConfigError):
        load_effective_config(tmp_path)


def test_empty_sections_fall_back_to_defaults(tmp_path: Path) -> None:
    config = {"logging": None, "journal": None, "tasks_file": None}

    assert logging_level(config) == "WARNING"
    assert journal_enabled(config) is False
    assert resolve_paths(tmp_path, config)["tasks_file"] == (
        tmp_path / "config" / "tasks.yaml"
    ).resolve()


def test_non_mapping_section_is_config_error() -> None:
    with pytest.raises(TaskConfigError):
        journal_enabled({"journal": "yes"})


def test_relative_tasks_file_resolves_against_root(tmp_path: Path, monkeypatch) -> None:
    project = tmp_path / "proj"
    (project / "config").mkdir(parents=True)
    (project / "config" / "ci.yaml").write_text(
        "tasks:\n  ci:\n    steps:\n      - run: [cargo, test]\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)

    bundle = Orchestrator(root=project, tasks_file=Path("config/ci.yaml")).build()

    assert bundle.registry.task_names() == ["ci"]
