"""Tests for scaffold copying."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillport.config.schema import SkillConfig
from skillport.constants import TEXT_EXTENSIONS
from skillport.rewrite import build_rewrite_rules
from skillport.scaffold import (
    copy_scaffold,
    copy_tree,
    is_text_file,
    reset_output_dir,
    transform_and_copy_file,
)

RULES = build_rewrite_rules("gsd-codex")


@pytest.mark.unit
class TestResetOutputDir:
    def test_removes_previous_contents(self, tmp_path: Path) -> None:
        skill_root = tmp_path / "skills" / "gsd-codex"
        (skill_root / "stale").mkdir(parents=True)
        (skill_root / "stale" / "old.md").write_text("old", encoding="utf-8")

        reset_output_dir(skill_root)

        assert skill_root.is_dir()
        assert list(skill_root.iterdir()) == []

    def test_creates_missing_parents(self, tmp_path: Path) -> None:
        skill_root = tmp_path / "a" / "b"
        reset_output_dir(skill_root)
        assert skill_root.is_dir()


@pytest.mark.unit
class TestTransformAndCopyFile:
    def test_text_file_is_rewritten(self, tmp_path: Path) -> None:
        src = tmp_path / "doc.md"
        src.write_text("~/.claude/get-shit-done/x", encoding="utf-8")
        dest = tmp_path / "out" / "nested" / "doc.md"

        transform_and_copy_file(src, dest, RULES, TEXT_EXTENSIONS)

        assert dest.read_text(encoding="utf-8") == "~/.codex/skills/gsd-codex/get-shit-done/x"

    def test_extension_match_is_case_insensitive(self, tmp_path: Path) -> None:
        assert is_text_file(Path("README.MD"), TEXT_EXTENSIONS)
        assert not is_text_file(Path("logo.png"), TEXT_EXTENSIONS)

    def test_binary_file_is_byte_identical(self, tmp_path: Path) -> None:
        payload = b"\x00\xff~/.claude/get-shit-done/\x80"
        src = tmp_path / "blob.bin"
        src.write_bytes(payload)
        dest = tmp_path / "out" / "blob.bin"

        transform_and_copy_file(src, dest, RULES, TEXT_EXTENSIONS)

        assert dest.read_bytes() == payload

    def test_unreadable_source_propagates(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            transform_and_copy_file(tmp_path / "missing.md", tmp_path / "out.md", RULES, TEXT_EXTENSIONS)


@pytest.mark.unit
class TestCopyTree:
    def test_missing_source_is_skipped(self, tmp_path: Path) -> None:
        assert copy_tree(tmp_path / "absent", tmp_path / "dest", RULES, TEXT_EXTENSIONS) == 0
        assert not (tmp_path / "dest").exists()

    def test_mirrors_relative_layout(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        (src / "a" / "b").mkdir(parents=True)
        (src / "a" / "b" / "c.md").write_text("c", encoding="utf-8")
        (src / "top.txt").write_text("t", encoding="utf-8")

        copied = copy_tree(src, tmp_path / "dest", RULES, TEXT_EXTENSIONS)

        assert copied == 2
        assert (tmp_path / "dest" / "a" / "b" / "c.md").read_text(encoding="utf-8") == "c"
        assert (tmp_path / "dest" / "top.txt").exists()


@pytest.mark.unit
class TestCopyScaffold:
    def test_commands_filter(self, gsd_project: Path, tmp_path: Path) -> None:
        skill_root = tmp_path / "skill"
        copy_scaffold(gsd_project, skill_root, SkillConfig(), RULES)

        commands = skill_root / "references" / "commands"
        assert sorted(p.name for p in commands.iterdir()) == ["new-project.md", "plan-phase.md"]

    def test_agents_only_markdown(self, gsd_project: Path, tmp_path: Path) -> None:
        skill_root = tmp_path / "skill"
        copy_scaffold(gsd_project, skill_root, SkillConfig(), RULES)

        agents = skill_root / "references" / "agents"
        assert [p.name for p in agents.iterdir()] == ["gsd-planner.md"]
        assert "references/agents/gsd-planner.md" in (agents / "gsd-planner.md").read_text(encoding="utf-8")

    def test_unfiltered_categories_copy_everything(self, gsd_project: Path, tmp_path: Path) -> None:
        skill_root = tmp_path / "skill"
        copied = copy_scaffold(gsd_project, skill_root, SkillConfig(), RULES)

        templates = skill_root / "references" / "templates"
        assert sorted(p.name for p in templates.iterdir()) == ["config.json", "project.md"]
        assert (skill_root / "references" / "workflows" / "nested" / "deep" / "step.md").exists()
        assert copied["workflows"] == 2

    def test_runtime_assets_copied_wholesale(self, gsd_project: Path, tmp_path: Path) -> None:
        skill_root = tmp_path / "skill"
        copied = copy_scaffold(gsd_project, skill_root, SkillConfig(), RULES)

        runtime = skill_root / "get-shit-done"
        script = (runtime / "bin" / "gsd-tools.js").read_text(encoding="utf-8")
        assert script == "const root = '~/.codex/skills/gsd-codex/get-shit-done/';\n"
        assert (runtime / "bin" / "logo.png").read_bytes() == (gsd_project / "get-shit-done" / "bin" / "logo.png").read_bytes()
        assert copied["runtime"] == 7

    def test_missing_category_source_is_not_an_error(self, gsd_project: Path, tmp_path: Path) -> None:
        import shutil

        shutil.rmtree(gsd_project / "agents")
        skill_root = tmp_path / "skill"
        copied = copy_scaffold(gsd_project, skill_root, SkillConfig(), RULES)

        assert copied["agents"] == 0
        assert not (skill_root / "references" / "agents").exists()

    def test_runtime_assets_can_be_disabled(self, gsd_project: Path, tmp_path: Path) -> None:
        skill_root = tmp_path / "skill"
        copied = copy_scaffold(gsd_project, skill_root, SkillConfig(runtime_assets=None), RULES)

        assert "runtime" not in copied
        assert not (skill_root / "get-shit-done").exists()
