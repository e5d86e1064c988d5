"""Iterative directory traversal used for copying, counting and listing."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

Predicate = Callable[[Path, str], bool]


@dataclass(frozen=True)
class FileEntry:
    path: Path
    relative: str  # always "/"-separated


def has_extension(extension: str) -> Predicate:
    """Predicate matching file names ending in ``extension``."""

    def _predicate(_path: Path, name: str) -> bool:
        return name.endswith(extension)

    return _predicate


def walk_files(root: Path, predicate: Predicate | None = None) -> Iterator[FileEntry]:
    """Yield every file below ``root`` accepted by ``predicate``.

    Uses an explicit stack rather than recursion. Order is unspecified; sort
    the results when it matters. A missing root yields nothing.
    """
    if not root.is_dir():
        return

    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        with os.scandir(current) as entries:
            for entry in entries:
                entry_path = Path(entry.path)
                if entry.is_dir():
                    stack.append(entry_path)
                    continue
                if predicate is None or predicate(entry_path, entry.name):
                    yield FileEntry(entry_path, entry_path.relative_to(root).as_posix())


def count_files(root: Path, predicate: Predicate | None = None) -> int:
    return sum(1 for _ in walk_files(root, predicate))


def collect_relative_files(root: Path, predicate: Predicate | None = None) -> list[str]:
    """Return sorted "/"-separated paths of matching files relative to ``root``."""
    return sorted(entry.relative for entry in walk_files(root, predicate))
