"""Copy the source trees into a fresh skill directory.

Every read or write error propagates; a half-written skill root is simply
replaced on the next run because ``reset_output_dir`` always starts clean.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, Sequence

from instrukt_ai_logging import get_logger

from skillport.config.schema import SkillConfig
from skillport.rewrite import RewriteRule, rewrite_paths
from skillport.walker import Predicate, walk_files

logger = get_logger(__name__)


def reset_output_dir(skill_root: Path) -> None:
    """Delete ``skill_root`` recursively (if present) and recreate it empty."""
    if skill_root.exists():
        shutil.rmtree(skill_root)
    skill_root.mkdir(parents=True)


def is_text_file(path: Path, text_extensions: Iterable[str]) -> bool:
    return path.suffix.lower() in set(text_extensions)


def transform_and_copy_file(
    src: Path,
    dest: Path,
    rules: Sequence[RewriteRule],
    text_extensions: Iterable[str],
) -> None:
    """Copy one file, rewriting host paths when it is a text file."""
    data = src.read_bytes()
    if is_text_file(src, text_extensions):
        data = rewrite_paths(data.decode("utf-8"), rules).encode("utf-8")

    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(data)


def copy_tree(
    src: Path,
    dest: Path,
    rules: Sequence[RewriteRule],
    text_extensions: Iterable[str],
    include: Predicate | None = None,
) -> int:
    """Mirror ``src`` into ``dest``; returns the number of files written."""
    if not src.is_dir():
        logger.debug("Skipping missing source tree %s", src)
        return 0

    extensions = tuple(text_extensions)
    dest.mkdir(parents=True, exist_ok=True)
    copied = 0
    for entry in walk_files(src, include):
        transform_and_copy_file(entry.path, dest / entry.relative, rules, extensions)
        copied += 1
    return copied


def copy_scaffold(
    project_root: Path,
    skill_root: Path,
    config: SkillConfig,
    rules: Sequence[RewriteRule],
) -> dict[str, int]:
    """Copy every category plus the runtime asset tree into ``skill_root``.

    Returns files written per tree, keyed by category name (and ``runtime``).
    """
    copied: dict[str, int] = {}
    for category in config.categories:
        copied[category.name] = copy_tree(
            project_root / category.source,
            skill_root / category.dest,
            rules,
            config.text_extensions,
            include=category.includes,
        )
        logger.info("Copied %d %s file(s)", copied[category.name], category.name)

    # Runtime helper assets invoked directly by workflows and agents.
    if config.runtime_assets is not None:
        copied["runtime"] = copy_tree(
            project_root / config.runtime_assets.source,
            skill_root / config.runtime_assets.dest,
            rules,
            config.text_extensions,
        )
        logger.info("Copied %d runtime asset file(s)", copied["runtime"])
    return copied
