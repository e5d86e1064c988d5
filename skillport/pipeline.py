"""Generate a skill bundle: reset -> copy scaffold -> write metadata.

Each run starts from an empty skill root, so the pipeline is idempotent and a
failed run is recovered by running it again.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from instrukt_ai_logging import get_logger

from skillport.config.loader import load_skill_config
from skillport.config.schema import SkillConfig
from skillport.manifest import ManifestRecord, write_metadata
from skillport.provenance import GitProvenance, ProvenanceProvider
from skillport.rewrite import build_rewrite_rules, check_rule_order
from skillport.scaffold import copy_scaffold, reset_output_dir

logger = get_logger(__name__)


class OutputLocationError(ValueError):
    """Raised when the skill root would overlap the trees it is built from."""


def _is_within(path: Path, parent: Path) -> bool:
    return path == parent or parent in path.parents


def check_output_location(project_root: Path, skill_root: Path, config: SkillConfig) -> None:
    """Reject skill roots that the reset would delete sources from or the copy would walk into."""
    if _is_within(project_root, skill_root):
        raise OutputLocationError(f"Output {skill_root} contains project root {project_root}")

    sources = [category.source for category in config.categories]
    if config.runtime_assets is not None:
        sources.append(config.runtime_assets.source)
    for source in sources:
        source_root = (project_root / source).resolve()
        if _is_within(skill_root, source_root) or _is_within(source_root, skill_root):
            raise OutputLocationError(f"Output {skill_root} overlaps source tree {source_root}")


@dataclass(frozen=True)
class GenerationResult:
    skill_root: Path
    manifest: ManifestRecord


def generate_skill(
    project_root: Path,
    *,
    config: Optional[SkillConfig] = None,
    provider: Optional[ProvenanceProvider] = None,
    output_dir: Optional[Path] = None,
) -> GenerationResult:
    """Run the full generation pipeline for ``project_root``."""
    project_root = project_root.expanduser().resolve()
    if config is None:
        config = load_skill_config(project_root)
    if provider is None:
        provider = GitProvenance(project_root)
    skill_root = (output_dir.expanduser() if output_dir else config.resolve_output_dir(project_root)).resolve()

    rules = build_rewrite_rules(
        config.skill_name,
        source_root=config.rewrite.source_root,
        target_root=config.rewrite.target_root,
        workflow_dir=config.rewrite.workflow_dir,
    )
    check_rule_order(rules)
    check_output_location(project_root, skill_root, config)

    logger.info("Generating skill %s at %s", config.skill_name, skill_root)
    reset_output_dir(skill_root)
    copy_scaffold(project_root, skill_root, config, rules)
    manifest = write_metadata(project_root, skill_root, config, provider)
    return GenerationResult(skill_root=skill_root, manifest=manifest)
