"""Render the generated references/INDEX.md listing."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from skillport.config.schema import CategoryConfig
from skillport.constants import DOC_EXTENSION, INDEX_FILENAME, REFERENCES_DIR
from skillport.walker import collect_relative_files, has_extension


def render_index(skill_root: Path, categories: Sequence[CategoryConfig], *, heading: str) -> str:
    """Render the index from the copied tree under ``skill_root``.

    Each category gets a ``## Title (n)`` section listing its documentation
    files in sorted order, prefixed with the lowercased title.
    """
    lines = [f"# {heading}", ""]
    for category in categories:
        entries = collect_relative_files(skill_root / category.dest, has_extension(DOC_EXTENSION))
        lines.append(f"## {category.title} ({len(entries)})")
        prefix = category.title.lower()
        for entry in entries:
            lines.append(f"- `{prefix}/{entry}`")
        lines.append("")
    return "\n".join(lines).rstrip("\n") + "\n"


def write_index(skill_root: Path, categories: Sequence[CategoryConfig], *, heading: str) -> Path:
    index_path = skill_root / REFERENCES_DIR / INDEX_FILENAME
    index_path.parent.mkdir(parents=True, exist_ok=True)
    index_path.write_text(render_index(skill_root, categories, heading=heading), encoding="utf-8")
    return index_path
