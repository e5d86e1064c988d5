"""Best-effort provenance lookups for the generated skill manifest.

Providers never raise: a failed git query means "no data from this source"
and detection falls through to the next source or to a fixed sentinel.
"""

from __future__ import annotations

import json
import re
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from instrukt_ai_logging import get_logger

from skillport.constants import DEFAULT_REF, LOCAL_REPO_SENTINEL, NO_COMMIT_SENTINEL

logger = get_logger(__name__)

_GITHUB_HTTPS_RE = re.compile(
    r"^https?://(?:www\.)?github\.com/([^/]+)/([^/?#]+?)(?:\.git)?(?:[/?#].*)?$",
    re.IGNORECASE,
)
_GITHUB_SSH_RE = re.compile(r"^git@github\.com:([^/]+)/([^/.]+?)(?:\.git)?$", re.IGNORECASE)


class ProvenanceProvider(Protocol):
    def remote_url(self, name: str) -> str | None: ...

    def default_ref(self) -> str | None: ...

    def current_branch(self) -> str | None: ...

    def current_commit(self) -> str | None: ...


class GitProvenance:
    """Query the git checkout at ``repo_root``."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    def _git(self, *args: str) -> str | None:
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.repo_root,
                capture_output=True,
                text=True,
                check=False,
            )
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("git %s unavailable: %s", " ".join(args), e)
            return None
        if result.returncode != 0:
            logger.debug("git %s exited %d", " ".join(args), result.returncode)
            return None
        output = result.stdout.strip()
        return output or None

    def remote_url(self, name: str) -> str | None:
        return self._git("remote", "get-url", name)

    def default_ref(self) -> str | None:
        head = self._git("symbolic-ref", "-q", "--short", "refs/remotes/origin/HEAD")
        if not head:
            return None
        return head.rsplit("/", 1)[-1] or None

    def current_branch(self) -> str | None:
        branch = self._git("rev-parse", "--abbrev-ref", "HEAD")
        # Detached checkouts report the literal "HEAD".
        if not branch or branch == "HEAD":
            return None
        return branch

    def current_commit(self) -> str | None:
        return self._git("rev-parse", "HEAD")


@dataclass
class StaticProvenance:
    """Fixed provenance values; the all-``None`` default means no git context."""

    remotes: dict[str, str] = field(default_factory=dict)
    ref: str | None = None
    branch: str | None = None
    commit: str | None = None

    def remote_url(self, name: str) -> str | None:
        return self.remotes.get(name)

    def default_ref(self) -> str | None:
        return self.ref

    def current_branch(self) -> str | None:
        return self.branch

    def current_commit(self) -> str | None:
        return self.commit


def normalize_github_repo_url(raw_url: str | None) -> str | None:
    """Normalize a GitHub HTTPS or SSH URL to ``https://github.com/<owner>/<repo>.git``.

    Returns ``None`` for anything that is not a recognizable GitHub URL.
    """
    if not raw_url or not raw_url.strip():
        return None

    source = raw_url.strip()
    if source.startswith("git+"):
        source = source[len("git+") :]

    match = _GITHUB_HTTPS_RE.match(source) or _GITHUB_SSH_RE.match(source)
    if not match:
        return None
    return f"https://github.com/{match.group(1)}/{match.group(2)}.git"


def read_package_repository(descriptor_path: Path) -> str | None:
    """Return the repository URL declared in a package.json-style descriptor."""
    try:
        data = json.loads(descriptor_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug("No repository from %s: %s", descriptor_path, e)
        return None
    if not isinstance(data, dict):
        return None

    repository = data.get("repository")
    if isinstance(repository, str):
        return repository
    if isinstance(repository, dict):
        url = repository.get("url")
        if isinstance(url, str):
            return url
    return None


def detect_source_repo(provider: ProvenanceProvider, descriptor_path: Path) -> str:
    """Resolve the source repository: origin, upstream, then the package descriptor."""
    candidates = (
        lambda: provider.remote_url("origin"),
        lambda: provider.remote_url("upstream"),
        lambda: read_package_repository(descriptor_path),
    )
    for candidate in candidates:
        repo_url = normalize_github_repo_url(candidate())
        if repo_url:
            return repo_url
    logger.debug("No recognizable repository URL; using %s", LOCAL_REPO_SENTINEL)
    return LOCAL_REPO_SENTINEL


def detect_source_ref(provider: ProvenanceProvider) -> str:
    """Resolve the source branch: remote default, current branch, then ``main``."""
    return provider.default_ref() or provider.current_branch() or DEFAULT_REF


def detect_source_commit(provider: ProvenanceProvider) -> str:
    return provider.current_commit() or NO_COMMIT_SENTINEL
