"""Pytest configuration for skillport tests."""

import logging
from pathlib import Path

import instrukt_ai_logging
import pytest


def _noop_configure_logging(*_args, **_kwargs):  # type: ignore[no-untyped-def]
    return None


instrukt_ai_logging.configure_logging = _noop_configure_logging  # type: ignore[assignment]
logging.getLogger("skillport").handlers.clear()
logging.getLogger().handlers.clear()


def pytest_collection_modifyitems(config, items):
    """Set per-marker timeouts: unit=1s, integration=5s."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(1))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(5))


def write_file(path: Path, content: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def gsd_project(tmp_path: Path) -> Path:
    """A small GSD-style source project."""
    root = tmp_path / "project"
    write_file(root / "commands" / "gsd" / "plan-phase.md", "Read ~/.claude/get-shit-done/workflows/plan.md\n")
    write_file(root / "commands" / "gsd" / "new-project.md", "# New project\n")
    write_file(root / "commands" / "gsd" / "plan-phase.bak.md", "stale backup\n")
    write_file(root / "commands" / "gsd" / "notes.txt", "not a command\n")
    write_file(root / "agents" / "gsd-planner.md", "Spawned from ~/.claude/agents/gsd-planner.md\n")
    write_file(root / "agents" / "helper.sh", "#!/bin/sh\n")
    workflows = root / "get-shit-done"
    write_file(workflows / "workflows" / "plan.md", "See ~/.claude/commands/gsd/plan-phase.md\n")
    write_file(workflows / "workflows" / "nested" / "deep" / "step.md", "step\n")
    write_file(workflows / "references" / "principles.md", "Cache at ~/.claude/cache/state.json\n")
    write_file(workflows / "templates" / "project.md", "# Project\n")
    write_file(workflows / "templates" / "config.json", '{"root": "~/.claude/get-shit-done"}\n')
    write_file(workflows / "bin" / "gsd-tools.js", "const root = '~/.claude/get-shit-done/';\n")
    write_file(workflows / "bin" / "logo.png", b"\x89PNG\r\n\x1a\n~/.claude/get-shit-done/\xff\x00")
    return root
