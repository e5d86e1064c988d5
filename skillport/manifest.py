"""Write skill metadata: index, descriptors and the provenance manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence, TypedDict

import frontmatter
import yaml
from frontmatter import Post
from frontmatter.default_handlers import YAMLHandler
from instrukt_ai_logging import get_logger

from skillport.config.schema import CategoryConfig, SkillConfig
from skillport.constants import (
    INTERFACE_DIR,
    INTERFACE_FILENAME,
    MANIFEST_FILENAME,
    SKILL_README_FILENAME,
)
from skillport.index import write_index
from skillport.provenance import (
    ProvenanceProvider,
    detect_source_commit,
    detect_source_ref,
    detect_source_repo,
)
from skillport.walker import count_files

logger = get_logger(__name__)


class ManifestRecord(TypedDict):
    source_repo: str
    source_ref: str
    source_commit: str
    generated_skill: str
    counts: dict[str, int]


class StableYAMLHandler(YAMLHandler):
    """Frontmatter YAML handler with stable ordering and wide line width."""

    def export(self, metadata: dict[str, object], **kwargs: object) -> str:
        return yaml.safe_dump(
            metadata,
            sort_keys=False,
            width=1000,
            default_flow_style=False,
            allow_unicode=True,
        ).rstrip()


_FRONTMATTER_HANDLER = StableYAMLHandler()

_SKILL_BODY = """\
Use this skill as a compatibility layer for the official GSD methodology.

## Operating Rules

1. Load only the specific reference files required for the current command.
2. Treat `references/commands/*.md` as user-facing entry points and `references/workflows/*.md` as execution details.
3. Use `references/agents/*.md` only when the command requires delegation behavior.
4. Preserve safety constraints from the current environment; do not assume permission-skipping flags are allowed.
5. Keep outputs aligned to the active repository conventions and existing planning files.

## Navigation

- Command docs: `references/commands/`
- Workflow docs: `references/workflows/`
- Agent roles: `references/agents/`
- Core references: `references/references/`
- Templates: `references/templates/`
- Generated index: `references/INDEX.md`

## Common Adaptations for Codex

1. If an upstream flow expects runtime-specific slash command behavior, execute the equivalent steps directly in this session.
2. If an upstream flow expects a tool not available here, apply the nearest supported equivalent and record the substitution in the output.
3. Keep plans concrete and verifiable; include explicit file paths and checks.
"""


def render_skill_readme(config: SkillConfig) -> str:
    post = Post(f"# {config.title}\n\n{_SKILL_BODY}", name=config.skill_name, description=config.description)
    return frontmatter.dumps(post, handler=_FRONTMATTER_HANDLER).rstrip("\n") + "\n"


def write_skill_readme(skill_root: Path, config: SkillConfig) -> Path:
    path = skill_root / SKILL_README_FILENAME
    path.write_text(render_skill_readme(config), encoding="utf-8")
    return path


def write_interface_descriptor(skill_root: Path, config: SkillConfig) -> Path:
    """Write agents/openai.yaml describing how the host presents the skill."""
    payload = {
        "interface": {
            "display_name": config.interface.display_name,
            "short_description": config.interface.short_description,
            "default_prompt": config.interface.default_prompt,
        }
    }
    path = skill_root / INTERFACE_DIR / INTERFACE_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(payload, sort_keys=False, width=1000), encoding="utf-8")
    return path


def collect_counts(skill_root: Path, categories: Sequence[CategoryConfig]) -> dict[str, int]:
    """Count files per category by walking the copied tree."""
    return {category.name: count_files(skill_root / category.dest, category.counts) for category in categories}


def build_manifest(
    *,
    project_root: Path,
    skill_root: Path,
    config: SkillConfig,
    provider: ProvenanceProvider,
) -> ManifestRecord:
    return {
        "source_repo": detect_source_repo(provider, project_root / config.package_descriptor),
        "source_ref": detect_source_ref(provider),
        "source_commit": detect_source_commit(provider),
        "generated_skill": config.skill_name,
        "counts": collect_counts(skill_root, config.categories),
    }


def write_manifest(skill_root: Path, record: ManifestRecord) -> Path:
    path = skill_root / MANIFEST_FILENAME
    path.write_text(json.dumps(record, indent=2) + "\n", encoding="utf-8")
    return path


def write_metadata(
    project_root: Path,
    skill_root: Path,
    config: SkillConfig,
    provider: ProvenanceProvider,
) -> ManifestRecord:
    """Write the index, descriptors and manifest for a copied skill tree."""
    (skill_root / INTERFACE_DIR).mkdir(parents=True, exist_ok=True)
    index_path = write_index(skill_root, config.categories, heading=config.index_heading)
    logger.info("Index: %s", index_path)

    record = build_manifest(project_root=project_root, skill_root=skill_root, config=config, provider=provider)
    write_skill_readme(skill_root, config)
    write_interface_descriptor(skill_root, config)
    manifest_path = write_manifest(skill_root, record)
    logger.info("Manifest: %s (source %s@%s)", manifest_path, record["source_repo"], record["source_ref"])
    return record
